"""Helpers to load the triage rule catalogue."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from ..schemas.triage import Catalogue

__all__ = ["CatalogueError", "build_catalogue", "load_catalogue", "load_pack"]

DEFAULT_PACK = "catalogue"


class CatalogueError(Exception):
    """Raised when a content pack is missing or violates catalogue invariants."""


@lru_cache(maxsize=8)
def load_pack(pack_id: str = DEFAULT_PACK) -> Dict[str, Any]:
    """Load the raw YAML pack identified by *pack_id*."""

    package = __name__
    path = resources.files(package).joinpath(f"{pack_id}.yml")
    if not path.is_file():
        raise CatalogueError(f"Unknown content pack: {pack_id}")
    with path.open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def build_catalogue(pack: Dict[str, Any]) -> Catalogue:
    categories = []
    for category in pack.get("categories", []) or []:
        symptoms = [
            {**symptom, "category": category["id"]}
            for symptom in category.get("symptoms", []) or []
        ]
        categories.append({"id": category["id"], "name": category["name"], "symptoms": symptoms})
    try:
        return Catalogue.model_validate(
            {
                "version": str(pack.get("meta", {}).get("version", "0")),
                "categories": categories,
                "risk_factors": pack.get("risk_factors", []) or [],
                "levels": pack.get("levels", {}) or {},
                "anaphylaxis_ids": pack.get("anaphylaxis", []) or [],
            }
        )
    except (ValidationError, KeyError) as exc:
        raise CatalogueError(f"Invalid triage catalogue: {exc}") from exc


@lru_cache(maxsize=8)
def load_catalogue(pack_id: str = DEFAULT_PACK) -> Catalogue:
    """Return the validated catalogue for *pack_id* (cached)."""

    return build_catalogue(load_pack(pack_id))

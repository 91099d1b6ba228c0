"""Score registry for the bedside calculators that feed symptom tags into triage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

from ...schemas.triage import PatientInput, ScoreResult

__all__ = [
    "ScoreDefinition",
    "ScoreInputError",
    "UnknownScoreError",
    "apply_score",
    "available_scores",
    "get_score",
    "register",
    "run_score",
]

BandFunc = Callable[[int], Optional[str]]


class ScoreInputError(ValueError):
    """Raised when component values are missing, unknown or outside their allowed set."""


class UnknownScoreError(LookupError):
    """Raised when no calculator is registered under the requested name."""


@dataclass(frozen=True)
class ScoreDefinition:
    name: str
    components: Mapping[str, Tuple[int, ...]]
    injects: Tuple[str, ...]
    band: BandFunc

    def total(self, values: Mapping[str, int]) -> int:
        unknown = sorted(set(values) - set(self.components))
        if unknown:
            raise ScoreInputError(f"{self.name}: unknown components {unknown}")
        score = 0
        for component, allowed in self.components.items():
            if component not in values:
                raise ScoreInputError(f"{self.name}: missing component '{component}'")
            value = values[component]
            if value not in allowed:
                raise ScoreInputError(
                    f"{self.name}: {component}={value!r} not in {list(allowed)}"
                )
            score += value
        return score


_REGISTRY: Dict[str, ScoreDefinition] = {}


def register(
    name: str,
    *,
    components: Mapping[str, Iterable[int]],
    injects: Iterable[str],
) -> Callable[[BandFunc], BandFunc]:
    def decorator(func: BandFunc) -> BandFunc:
        _REGISTRY[name] = ScoreDefinition(
            name=name,
            components={key: tuple(values) for key, values in components.items()},
            injects=tuple(injects),
            band=func,
        )
        return func

    return decorator


def get_score(name: str) -> ScoreDefinition:
    definition = _REGISTRY.get(name.upper())
    if definition is None:
        raise UnknownScoreError(f"Unknown score: {name}")
    return definition


def available_scores() -> Dict[str, ScoreDefinition]:
    return dict(_REGISTRY)


def run_score(name: str, values: Mapping[str, int]) -> ScoreResult:
    """Sum the component values and map the total onto the calculator's symptom band."""

    definition = get_score(name)
    total = definition.total(values)
    return ScoreResult(name=definition.name, total=total, symptom_id=definition.band(total))


def apply_score(patient: PatientInput, result: ScoreResult) -> PatientInput:
    """Replace whatever this calculator injected before with the tag for *result*."""

    definition = get_score(result.name)
    symptoms = set(patient.symptoms) - set(definition.injects)
    if result.symptom_id:
        symptoms.add(result.symptom_id)
    return patient.model_copy(update={"symptoms": frozenset(symptoms)})

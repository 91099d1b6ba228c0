"""Pediatric emergency triage engine."""

__version__ = "0.1.0"

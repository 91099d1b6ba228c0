"""HTTP API exposing the triage engine."""

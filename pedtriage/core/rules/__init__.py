from .engine import aggregate, selected_risk_factors, selected_symptoms
from .vitals import age_band, classify, is_hypotensive

__all__ = [
    "aggregate",
    "age_band",
    "classify",
    "is_hypotensive",
    "selected_risk_factors",
    "selected_symptoms",
]

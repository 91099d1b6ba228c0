from .age import NormalizedAge, normalize_age
from .units import VITAL_FIELDS, accepts_decimal, accepts_integer, to_decimal, to_integer

__all__ = [
    "NormalizedAge",
    "normalize_age",
    "VITAL_FIELDS",
    "accepts_decimal",
    "accepts_integer",
    "to_decimal",
    "to_integer",
]

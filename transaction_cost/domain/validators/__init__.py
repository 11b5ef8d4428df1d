"""Domain validators. Pure validation functions."""

from transaction_cost.domain.validators.cost_lookup_validator import (
    REQUIRED_FIELDS,
    ValidationPipeline,
    ValidationRule,
    build_rules,
    validate_required_fields,
)

__all__ = [
    "REQUIRED_FIELDS",
    "ValidationPipeline",
    "ValidationRule",
    "build_rules",
    "validate_required_fields",
]

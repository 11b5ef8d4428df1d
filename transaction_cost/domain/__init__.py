"""Domain layer: catalog, models, schemas, validators, exceptions. Pure business logic only."""

from transaction_cost.domain.catalog import DEFAULT_CATALOG, CatalogData, HomologationCatalog
from transaction_cost.domain.exceptions import (
    CostLookupError,
    CostLookupNotFoundError,
    CostLookupValidationError,
    CostNotFoundError,
    CustomerNotFoundError,
    DomainError,
    IncompatibleChannelConceptError,
    InvalidChannelError,
    InvalidCountryError,
    MissingFieldError,
    UnknownConceptError,
)
from transaction_cost.domain.models import CostProfile, Customer
from transaction_cost.domain.schemas import (
    CostLookupRequest,
    CostLookupResponse,
    RequestHeaders,
)
from transaction_cost.domain.validators import ValidationPipeline, ValidationRule

__all__ = [
    "CatalogData",
    "CostLookupError",
    "CostLookupNotFoundError",
    "CostLookupRequest",
    "CostLookupResponse",
    "CostLookupValidationError",
    "CostNotFoundError",
    "CostProfile",
    "Customer",
    "CustomerNotFoundError",
    "DEFAULT_CATALOG",
    "DomainError",
    "HomologationCatalog",
    "IncompatibleChannelConceptError",
    "InvalidChannelError",
    "InvalidCountryError",
    "MissingFieldError",
    "RequestHeaders",
    "UnknownConceptError",
    "ValidationPipeline",
    "ValidationRule",
]

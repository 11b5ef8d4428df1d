"""Domain-specific exceptions. Pure domain layer, no infrastructure.

Every cost lookup failure carries a stable ``category`` and ``kind`` so that the
outer layer can map it to a transport status without inspecting messages.
"""


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CostLookupError(DomainError):
    """Base for typed failures of the transaction cost lookup."""

    category = "COST_LOOKUP_ERROR"
    kind = "domain"


class CostLookupValidationError(CostLookupError):
    """Caller input rejected before any external lookup."""

    kind = "validation"


class MissingFieldError(CostLookupValidationError):
    """Raised when a required request field is null or blank."""

    category = "MISSING_FIELD"

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} is required")


class InvalidChannelError(CostLookupValidationError):
    """Raised when the request channel is not a permitted channel."""

    category = "INVALID_CHANNEL"


class InvalidCountryError(CostLookupValidationError):
    """Raised when the country code is not in the catalog."""

    category = "INVALID_COUNTRY"


class UnknownConceptError(CostLookupValidationError):
    """Raised when the concept is not a PER concept or has no homologation."""

    category = "UNKNOWN_CONCEPT"


class IncompatibleChannelConceptError(CostLookupValidationError):
    """Raised when the channel does not accept the requested concept."""

    category = "INCOMPATIBLE_CHANNEL_CONCEPT"


class CostLookupNotFoundError(CostLookupError):
    """Business data absent in one of the lookups."""

    kind = "not_found"


class CustomerNotFoundError(CostLookupNotFoundError):
    """Raised when no customer matches the document type and number."""

    category = "CUSTOMER_NOT_FOUND"


class CostNotFoundError(CostLookupNotFoundError):
    """Raised when the customer has no cost profile for the transaction code."""

    category = "COST_NOT_FOUND"

"""Validators for the cost lookup request. Pure functions, no infrastructure or DB access."""

from dataclasses import dataclass
from typing import Callable, Sequence, Tuple

from transaction_cost.domain.catalog import HomologationCatalog
from transaction_cost.domain.exceptions import (
    InvalidChannelError,
    InvalidCountryError,
    MissingFieldError,
    UnknownConceptError,
)
from transaction_cost.domain.schemas.cost_lookup import CostLookupRequest, RequestHeaders

# Checked in this order; the first missing one is reported.
REQUIRED_FIELDS: Tuple[str, ...] = (
    "document_type",
    "document_number",
    "concept_code",
    "country_code",
)


@dataclass(frozen=True)
class ValidationRule:
    """Named, side-effect-free check. Raises a CostLookupValidationError on violation."""

    name: str
    check: Callable[[RequestHeaders, CostLookupRequest], None]


def validate_required_fields(headers: RequestHeaders, request: CostLookupRequest) -> None:
    """Each required field must be non-null and non-blank. Raises MissingFieldError."""
    for field_name in REQUIRED_FIELDS:
        value = getattr(request, field_name)
        if value is None or not value.strip():
            raise MissingFieldError(field_name)


def build_rules(catalog: HomologationCatalog) -> Tuple[ValidationRule, ...]:
    """Ordered rules: fields, channel, country, concept, channel/concept compatibility."""
    permitted = " or ".join(str(c) for c in sorted(catalog.data.permitted_channels))

    def channel_permitted(headers: RequestHeaders, request: CostLookupRequest) -> None:
        if not catalog.is_permitted_channel(headers.channel):
            raise InvalidChannelError(f"Invalid channel. Only {permitted} are permitted")

    def country_valid(headers: RequestHeaders, request: CostLookupRequest) -> None:
        if not catalog.is_valid_country(request.country_code):
            raise InvalidCountryError("Country code not permitted")

    def concept_valid(headers: RequestHeaders, request: CostLookupRequest) -> None:
        if not catalog.is_valid_concept(request.concept_code):
            raise UnknownConceptError("Concept code does not belong to the PER catalog")

    def channel_concept_compatible(headers: RequestHeaders, request: CostLookupRequest) -> None:
        catalog.check_channel_concept_compatibility(headers.channel, request.concept_code)

    return (
        ValidationRule("required_fields", validate_required_fields),
        ValidationRule("channel_permitted", channel_permitted),
        ValidationRule("country_valid", country_valid),
        ValidationRule("concept_valid", concept_valid),
        ValidationRule("channel_concept_compatible", channel_concept_compatible),
    )


class ValidationPipeline:
    """
    Fail-fast, ordered run of the rules followed by homologation.
    The internal transaction code is only produced when every rule passes.
    """

    def __init__(
        self,
        catalog: HomologationCatalog,
        rules: Sequence[ValidationRule] | None = None,
    ) -> None:
        self._catalog = catalog
        self._rules = tuple(rules) if rules is not None else build_rules(catalog)

    @property
    def rule_names(self) -> Tuple[str, ...]:
        return tuple(rule.name for rule in self._rules)

    def run(self, headers: RequestHeaders, request: CostLookupRequest) -> str:
        """Run every rule, then homologate. Returns the internal transaction code."""
        for rule in self._rules:
            rule.check(headers, request)
        return self._catalog.homologate(request.concept_code)

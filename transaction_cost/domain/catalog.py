"""Homologation catalog: concept codes, countries, channels. Immutable data, O(1) lookups."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

from transaction_cost.domain.exceptions import (
    IncompatibleChannelConceptError,
    UnknownConceptError,
)


@dataclass(frozen=True)
class CatalogData:
    """
    Fixed tables backing the catalog. Injected at construction; never mutated.

    exclusive_concepts: channel -> the only concept that channel accepts.
    rejected_concepts: channel -> concepts that channel refuses.
    Channels absent from both maps are unconstrained.
    """

    homologations: Mapping[str, str]
    countries: FrozenSet[str]
    per_concepts: FrozenSet[str]
    permitted_channels: FrozenSet[int]
    exclusive_concepts: Mapping[int, str] = field(default_factory=dict)
    rejected_concepts: Mapping[int, FrozenSet[str]] = field(default_factory=dict)


DEFAULT_CATALOG = CatalogData(
    homologations=MappingProxyType({
        "COBPER": "01PAR157",
        "TRCPRO": "01PAR153",
        "TRCTER": "01PAR154",
    }),
    countries=frozenset({"CR", "CO", "SV", "HN", "PA", "US"}),
    per_concepts=frozenset({
        "COBPER", "TRCPRO", "TRCTER", "TRA11R", "TR1VR", "TININD", "TINARC", "PPRREG",
    }),
    permitted_channels=frozenset({81, 151}),
    exclusive_concepts=MappingProxyType({81: "COBPER"}),
    rejected_concepts=MappingProxyType({151: frozenset({"COBPER"})}),
)


class HomologationCatalog:
    """Pure lookups over CatalogData. No side effects."""

    def __init__(self, data: CatalogData = DEFAULT_CATALOG) -> None:
        self._data = data

    @property
    def data(self) -> CatalogData:
        return self._data

    def homologate(self, concept_code: str) -> str:
        """Map a raw concept code to the internal transaction code. Raises UnknownConceptError."""
        internal = self._data.homologations.get(concept_code)
        if not internal or not internal.strip():
            raise UnknownConceptError("Transaction concept has no homologated code")
        return internal

    def is_valid_country(self, code: Optional[str]) -> bool:
        return code in self._data.countries

    def is_valid_concept(self, code: Optional[str]) -> bool:
        return code in self._data.per_concepts

    def is_permitted_channel(self, channel: Optional[int]) -> bool:
        return channel in self._data.permitted_channels

    def check_channel_concept_compatibility(self, channel: Optional[int], concept: str) -> None:
        """Raise IncompatibleChannelConceptError when the channel does not accept the concept."""
        exclusive = self._data.exclusive_concepts.get(channel)
        if exclusive is not None and concept != exclusive:
            raise IncompatibleChannelConceptError(
                f"Channel {channel} only accepts concept {exclusive}"
            )
        if concept in self._data.rejected_concepts.get(channel, frozenset()):
            raise IncompatibleChannelConceptError(
                f"Channel {channel} does not accept concept {concept}"
            )

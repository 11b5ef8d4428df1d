"""Governance-layer exceptions. Typed, no HTTP."""


class GovernanceError(Exception):
    """Base for all governance-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuditPersistenceError(GovernanceError):
    """Raised by audit repositories when a record could not be stored. Handled only by the sink."""

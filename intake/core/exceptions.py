"""
Exceptions
==========
Error taxonomy for the intake service.

    IntakeError
    ├── DialoguePreconditionError — a verb was called out of order (caller misuse)
    ├── IncompleteTicketError     — summary / ticket requested while slots are missing
    └── IntegrationError          — an external sink failed
        ├── TrackerError
        └── NotificationError

Extraction misses are NOT errors: the slot simply stays missing.
"""


class IntakeError(Exception):
    """Base class for all intake errors."""


class DialoguePreconditionError(IntakeError):
    """Raised before any mutation when a dialogue verb is not valid in the current state."""

    def __init__(self, operation: str, state: str, reason: str = "") -> None:
        self.operation = operation
        self.state = state
        message = f"'{operation}' is not allowed in state '{state}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class IncompleteTicketError(IntakeError):
    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Ticket is missing: {', '.join(missing)}")


class IntegrationError(IntakeError):
    """An external collaborator (tracker, chat webhook) could not be reached."""


class TrackerError(IntegrationError):
    pass


class NotificationError(IntegrationError):
    pass

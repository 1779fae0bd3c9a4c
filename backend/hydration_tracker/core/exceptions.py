"""Exception hierarchy for the intake record service.

Exception handling flow:
    1. Service layer raises a typed exception carrying a message key
    2. FastAPI exception handler catches it (see api/errors.py)
    3. Handler renders the key for the request locale into a problem response

Domain errors describe a request the caller got wrong and are never retried.
StoreError is an infrastructure failure, not a domain error.
"""

from __future__ import annotations


class HydrationError(Exception):
    """Base exception for all service errors."""

    message_key: str = "error.internal"

    def __init__(self, message: str | None = None):
        self.message = message or self.message_key
        super().__init__(self.message)


class DomainError(HydrationError):
    """A client-addressable condition: the request cannot be honoured as given."""


class InvalidFilterError(DomainError):
    """One or more filter rules failed; carries every violation, in rule order."""

    message_key = "intake.filter.invalid"

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Invalid filter parameters: {', '.join(self.errors)}")


class DuplicateTimestampError(DomainError):
    """Another record of the same owner already exists at this instant."""

    message_key = "intake.duplicate_timestamp"


class RecordNotFoundError(DomainError):
    """Record absent, or owned by someone else. Both cases look the same."""

    message_key = "intake.not_found"

    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__(f"Intake record {record_id} not found")


class UnknownUnitError(DomainError):
    """Unit tag outside the supported enumeration."""

    message_key = "unit.unknown"

    def __init__(self, tag: object, family: str | None = None):
        self.tag = tag
        self.family = family
        super().__init__(f"Unknown {family or 'unit'} tag: {tag!r}")


class StoreError(HydrationError):
    """Raised when the database fails for reasons unrelated to the request."""

    message_key = "error.internal"

    def __init__(self, message: str, operation: str | None = None):
        self.operation = operation
        super().__init__(message)

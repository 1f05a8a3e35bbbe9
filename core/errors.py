"""Errors raised by the entity stores and the election service."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Discriminant carried by every ElectionError.

    Callers (e.g. the JSON endpoint) branch on this value to pick a message
    or status code instead of checking exception subclasses.
    """
    VALIDATION = "validation"
    SELECTION_MISSING = "selection_missing"
    ALREADY_VOTED = "already_voted"
    DUPLICATE_IDENTIFIER = "duplicate_identifier"


class ElectionError(Exception):
    """Base class for rejected election operations.

    No operation mutates state before raising one of these.
    """
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ElectionError):
    """A registration was given an empty or blank name."""
    kind = ErrorKind.VALIDATION


class SelectionMissing(ElectionError):
    """A vote referenced a candidate or voter that is unknown or not selected."""
    kind = ErrorKind.SELECTION_MISSING


class AlreadyVoted(ElectionError):
    """A vote was cast for a voter who has already voted."""
    kind = ErrorKind.ALREADY_VOTED

    def __init__(self, voter_name: str):
        super().__init__(f"{voter_name} has already voted!")
        self.voter_name = voter_name


class DuplicateIdentifier(ElectionError):
    """An entity was added to a store that already holds its identifier."""
    kind = ErrorKind.DUPLICATE_IDENTIFIER

    def __init__(self, entity_type: str, entity_id: int):
        super().__init__(f"{entity_type} with id {entity_id} already exists")
        self.entity_type = entity_type
        self.entity_id = entity_id


class InvariantViolation(AssertionError):
    """Vote tally and voted flags disagree. Indicates a bug, never user error."""
    pass

"""Domain error taxonomy.

Use cases raise these; adapters translate them (e.g. to HTTP 404/400).
Storage failures are not wrapped: SQLAlchemy errors propagate unchanged.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for all domain-level errors."""


class EntityNotFoundError(DomainError):
    """Requested entity does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class InvalidArgumentError(DomainError, ValueError):
    """Caller supplied a value outside the accepted domain (e.g. page < 1)."""


__all__ = ["DomainError", "EntityNotFoundError", "InvalidArgumentError"]

"""Shared type aliases and errors for the smooshrooms core."""

from __future__ import annotations

EntityId = str


class NotConfiguredError(RuntimeError):
    """Raised when the core is used before a host has been bound."""


class UnknownEntityError(KeyError):
    """Raised when an entity id does not resolve to a live entity."""

    def __init__(self, entity_id: EntityId, message: str) -> None:
        self.entity_id = entity_id
        super().__init__(message)


class InvalidBoundsError(ValueError):
    """Raised on non-finite or non-positive arena dimensions."""

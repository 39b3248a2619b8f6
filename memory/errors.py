"""Errors raised by the entity memory when a caller opts into strict handling."""
from __future__ import annotations


class EntityMemoryError(Exception):
    """Base exception for all entity memory operations."""

    def __init__(self, message: str, entity_name: str = ""):
        self.entity_name = entity_name
        super().__init__(message)


class DuplicateEntityError(EntityMemoryError):
    def __init__(self, entity_name: str = ""):
        super().__init__(f"Entity '{entity_name}' supplied more than once", entity_name)


class MissingEntityError(EntityMemoryError):
    def __init__(self, entity_name: str = ""):
        super().__init__(f"No value remembered for entity '{entity_name}'", entity_name)

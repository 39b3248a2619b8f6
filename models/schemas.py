"""
Core data models for the entity memory.
These are the value types shared by the memory map, the formatters
and the template substitution layer.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ──────────────────────────────────────────────────────────────
#  Enums
# ──────────────────────────────────────────────────────────────

class EntityType(str, Enum):
    LOCAL = "LOCAL"           # programmatic entity, set by bot code
    LUIS = "LUIS"             # trained entity, extracted from user input
    ENUM = "ENUM"             # enumeration with fixed values


# ──────────────────────────────────────────────────────────────
#  MemoryValue — one recognized occurrence of an entity
# ──────────────────────────────────────────────────────────────

class MemoryValue(BaseModel):
    """A single remembered value. Immutable once built."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_text: Optional[str] = Field(default=None, alias="userText")          # literal text from the user
    display_text: Optional[str] = Field(default=None, alias="displayText")    # canonical text to show
    builtin_type: Optional[str] = Field(default="", alias="builtinType")      # e.g. "builtin.number"
    resolution: dict[str, Any] = {}                                           # opaque recognizer payload
    enum_value_id: Optional[str] = Field(default=None, alias="enumValueId")

    @property
    def text(self) -> Optional[str]:
        """Display text, falling back to the user text when it is empty."""
        return self.display_text if self.display_text else self.user_text

    @property
    def has_builtin_type(self) -> bool:
        return bool(self.builtin_type)


# ──────────────────────────────────────────────────────────────
#  FilledEntity — an entity id plus its ordered values
# ──────────────────────────────────────────────────────────────

class FilledEntity(BaseModel):
    """
    The values currently held by one entity.

    An empty ``values`` tuple means the entity was observed but holds
    nothing yet, which is different from the entity being absent.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    entity_id: Optional[str] = Field(default="", alias="entityId")
    values: tuple[MemoryValue, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.values


class Memory(BaseModel):
    """Flat name → values dump handed to transcript and UI consumers."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    entity_name: str = Field(alias="entityName")
    entity_values: tuple[MemoryValue, ...] = Field(default=(), alias="entityValues")


# ──────────────────────────────────────────────────────────────
#  EntityDefinition — the authoring layer's view of an entity
# ──────────────────────────────────────────────────────────────

class EntityDefinition(BaseModel):
    """Just enough of an entity definition to map ids to names."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    entity_id: str = Field(alias="entityId")
    entity_name: str = Field(alias="entityName")
    entity_type: str = Field(default=EntityType.LOCAL.value, alias="entityType")   # LOCAL | LUIS | ENUM | builtin name
    is_multivalue: bool = Field(default=False, alias="isMultivalue")

    @property
    def is_prebuilt(self) -> bool:
        return self.entity_name == f"builtin-{self.entity_type.lower()}"

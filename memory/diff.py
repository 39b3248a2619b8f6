"""Comparison helpers for memory snapshots taken at different turns."""
from __future__ import annotations

from typing import Sequence

from memory.filled_entity import FilledEntityMap
from models.schemas import FilledEntity, MemoryValue


def _same_value(a: MemoryValue, b: MemoryValue) -> bool:
    return (
        a.user_text == b.user_text
        and a.display_text == b.display_text
        and a.builtin_type == b.builtin_type
        and a.resolution == b.resolution
    )


def are_equal_memory_values(a: Sequence[MemoryValue], b: Sequence[MemoryValue]) -> bool:
    """
    True when both lists hold the same values, ignoring order.
    Values match on user text, display text, builtin type and resolution.
    """
    if len(a) != len(b):
        return False
    return all(any(_same_value(va, vb) for vb in b) for va in a)


def changed_filled_entities(original: FilledEntityMap, new: FilledEntityMap) -> list[FilledEntity]:
    """
    Records that differ between two snapshots.

    Entities dropped from ``new`` come first, as records with no values;
    then entities that are new or whose values changed, in ``new``'s order.
    """
    changed = [
        FilledEntity(entity_id=fe.entity_id, values=())
        for name, fe in original.items()
        if name not in new
    ]
    for name, fe in new.items():
        previous = original.get(name)
        if previous is None or not are_equal_memory_values(fe.values, previous.values):
            changed.append(fe)
    return changed

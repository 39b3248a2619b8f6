"""
Value Formatting — renders remembered values as readable text.

Lists are joined with a fixed English conjunction rule:

    ["d1"]              → "d1"
    ["d1", "d2"]        → "d1 and d2"
    ["d1", "d2", "d3"]  → "d1, d2 and d3"

There is no Oxford comma and the rule is not locale aware. An entity
with no values renders as ``None`` so that "nothing remembered" never
collapses into the empty string.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from models.schemas import EntityDefinition, FilledEntity, Memory, MemoryValue

if TYPE_CHECKING:
    from memory.filled_entity import FilledEntityMap


def join_as_sentence(texts: Sequence[str]) -> Optional[str]:
    """Join texts as "a, b and c". Returns None for an empty sequence."""
    if not texts:
        return None
    if len(texts) == 1:
        return texts[0]
    return f"{', '.join(texts[:-1])} and {texts[-1]}"


def memory_values_as_string(values: Sequence[MemoryValue]) -> Optional[str]:
    """
    Render values using display text, falling back to user text.
    Values with neither are skipped.
    """
    return join_as_sentence([v.text for v in values if isinstance(v.text, str)])


def values_as_string(filled_entity: FilledEntity) -> Optional[str]:
    return memory_values_as_string(filled_entity.values)


def values_as_list(filled_entity: FilledEntity, use_display: bool = False) -> list[str]:
    """
    Ordered texts of an entity's values.

    User text by default; ``use_display`` selects the display text
    (with user-text fallback). Values without the selected text are skipped.
    """
    if use_display:
        texts = (v.text for v in filled_entity.values)
    else:
        texts = (v.user_text for v in filled_entity.values)
    return [t for t in texts if isinstance(t, str)]


def entity_display_value_map(filled_entity_map: FilledEntityMap) -> dict[str, str]:
    """Entity name → rendered value, for every entity that holds a value."""
    result = {}
    for name in filled_entity_map:
        rendered = filled_entity_map.value_as_string(name)
        if rendered is not None:
            result[name] = rendered
    return result


def entity_id_display_map(
    definitions: Iterable[EntityDefinition],
    memories: Iterable[Memory],
) -> dict[str, str]:
    """Entity id → rendered value for dumped memories that match a definition."""
    by_name = {d.entity_name: d for d in definitions}
    result = {}
    for m in memories:
        definition = by_name.get(m.entity_name)
        if definition is None:
            continue
        rendered = memory_values_as_string(m.entity_values)
        if rendered is not None:
            result[definition.entity_id] = rendered
    return result

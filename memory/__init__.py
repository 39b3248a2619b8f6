"""
Entity Memory.

Tracks, per conversation turn, which entities hold which values, and
renders them back into text for display and template substitution:

  - FilledEntityMap holds name → FilledEntity and never mutates in place
  - formatting renders value lists as "a, b and c"
  - diff compares snapshots from two turns
"""
from memory.errors import EntityMemoryError, DuplicateEntityError, MissingEntityError
from memory.formatting import (
    join_as_sentence, memory_values_as_string, values_as_string, values_as_list,
    entity_display_value_map, entity_id_display_map,
)
from memory.filled_entity import FilledEntityMap
from memory.diff import are_equal_memory_values, changed_filled_entities
from memory.transcript import TranscriptTurnMemory

"""Per-turn memory snapshots carried alongside an imported transcript."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from memory.filled_entity import FilledEntityMap
from models.schemas import MemoryValue


@dataclass(frozen=True)
class TranscriptTurnMemory:
    """
    API results (one map per hypothetical) and optional pre-asserted
    predicted entities for one transcript turn. Plain data, no validation
    behaviour of its own.
    """
    input_text: str = ""
    api_results: tuple[FilledEntityMap, ...] = ()
    predicted_entities: Optional[tuple[MemoryValue, ...]] = None

    def rendered_results(self) -> list[dict[str, Optional[str]]]:
        """Each hypothetical's memory rendered as name → string."""
        return [
            {name: result.value_as_string(name) for name in result}
            for result in self.api_results
        ]

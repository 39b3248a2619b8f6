"""
Filled Entity Map — the per-turn memory of recognized entities.

Maps entity name → FilledEntity (entity id + ordered values). The map is
immutable: every operation that "changes" memory returns a new map and
leaves the receiver untouched. Records themselves are frozen models, so
unchanged records are shared between the old and new map.

Two states are kept apart on purpose:
  - name absent                 → entity never observed
  - name present, no values     → entity observed but currently unfilled

Lookups treat both the same way (``[]`` / ``None``); diffing does not.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Iterable, Iterator, Optional, Union

import structlog

from config.settings import DUPLICATE_POLICIES
from memory.errors import DuplicateEntityError
from memory.formatting import values_as_list, values_as_string
from models.schemas import EntityDefinition, FilledEntity, Memory, MemoryValue
from utils.text import split as split_text

logger = structlog.get_logger()

EntryPair = tuple[str, FilledEntity]
EntryTriple = tuple[str, Optional[str], Iterable[Union[MemoryValue, dict]]]


class FilledEntityMap(Mapping):
    """Read-only ordered mapping of entity name → FilledEntity."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, FilledEntity] = None):
        self._entries: dict[str, FilledEntity] = dict(entries or {})

    # ── Mapping protocol ──────────────────────────────────────

    def __getitem__(self, name: str) -> FilledEntity:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<FilledEntityMap {list(self._entries)}>"

    def names(self) -> list[str]:
        return list(self._entries)

    # ── Construction ──────────────────────────────────────────

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[Union[EntryPair, EntryTriple]],
        on_duplicate: str = "last_wins",
    ) -> FilledEntityMap:
        """
        Build a map from (name, FilledEntity) pairs or
        (name, entity_id, values) triples. Records given as dicts are
        validated here, so both forms fail at construction, not lookup.

        A repeated name is resolved by ``on_duplicate``:
          "last_wins": the later record replaces the earlier one but the
                        name keeps its first position; a warning is logged.
          "error":     DuplicateEntityError is raised.
        Applications pass ``get_settings().memory.on_duplicate`` to use the
        configured policy.
        """
        policy = on_duplicate
        if policy not in DUPLICATE_POLICIES:
            raise ValueError(f"Unknown duplicate policy '{policy}'")

        built: dict[str, FilledEntity] = {}
        for entry in entries:
            if len(entry) == 2:
                name, filled_entity = entry
                filled_entity = FilledEntity.model_validate(filled_entity)
            else:
                name, entity_id, values = entry
                filled_entity = FilledEntity(entity_id=entity_id, values=tuple(values))

            if name in built:
                if policy == "error":
                    raise DuplicateEntityError(name)
                logger.warning("duplicate_entity_name", name=name,
                               previous_id=built[name].entity_id,
                               entity_id=filled_entity.entity_id)
            built[name] = filled_entity
        return cls(built)

    @classmethod
    def from_filled_entities(
        cls,
        filled_entities: Iterable[FilledEntity],
        definitions: Iterable[EntityDefinition],
    ) -> FilledEntityMap:
        """Key id-addressed records by entity name. Unknown ids are skipped."""
        names_by_id = {d.entity_id: d.entity_name for d in definitions}
        pairs = []
        for fe in filled_entities:
            name = names_by_id.get(fe.entity_id)
            if name is None:
                logger.warning("unknown_entity_id", entity_id=fe.entity_id)
                continue
            pairs.append((name, fe))
        return cls.from_entries(pairs, on_duplicate="last_wins")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FilledEntityMap:
        """Inverse of to_dict(). Accepts camelCase or snake_case field names."""
        return cls({name: FilledEntity.model_validate(fe) for name, fe in (data or {}).items()})

    def with_updated_entity(self, name: str, filled_entity: FilledEntity) -> FilledEntityMap:
        """New map with ``name`` replaced or appended."""
        entries = dict(self._entries)
        entries[name] = filled_entity
        return FilledEntityMap(entries)

    def without_entity(self, name: str) -> FilledEntityMap:
        """New map with ``name`` removed. Removing an unknown name is a no-op."""
        if name not in self._entries:
            return self
        return FilledEntityMap({k: v for k, v in self._entries.items() if k != name})

    # ── Lookup ────────────────────────────────────────────────

    def value_as_list(self, name: str) -> list[str]:
        """User texts of the entity's values; [] when absent or unfilled."""
        filled_entity = self._entries.get(name)
        if filled_entity is None:
            return []
        return values_as_list(filled_entity)

    def value_as_string(self, name: str) -> Optional[str]:
        """Values rendered as "a, b and c"; None when absent or unfilled."""
        filled_entity = self._entries.get(name)
        if filled_entity is None:
            return None
        return values_as_string(filled_entity)

    def value_as_number(self, name: str) -> Optional[Union[int, float]]:
        """The rendered value as a number, or None if it is not numeric."""
        text = self.value_as_string(name)
        if text is None:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None

    def value_as_prebuilt(self, name: str) -> tuple[MemoryValue, ...]:
        """Raw values including builtin type and resolution; () when absent."""
        filled_entity = self._entries.get(name)
        return filled_entity.values if filled_entity is not None else ()

    # ── Remember / forget ─────────────────────────────────────

    def remember(
        self,
        name: str,
        entity_id: str,
        value: str,
        is_multivalue: bool = False,
        builtin_type: str = "",
        resolution: dict[str, Any] = None,
    ) -> FilledEntityMap:
        """
        Remember one value. An empty value forgets the entity.
        Single-value entities are overwritten; multi-value entities gain the
        value unless a value with the same user text is already held.
        """
        if not value:
            return self.without_entity(name)

        new_value = MemoryValue(
            user_text=value,
            display_text=value,
            builtin_type=builtin_type,
            resolution=resolution or {},
        )
        existing = self._entries.get(name)
        if is_multivalue and existing is not None:
            if any(v.user_text == value for v in existing.values):
                return self
            values = existing.values + (new_value,)
        else:
            values = (new_value,)

        logger.debug("entity_remembered", name=name, entity_id=entity_id)
        return self.with_updated_entity(name, FilledEntity(entity_id=entity_id, values=values))

    def remember_many(
        self,
        name: str,
        entity_id: str,
        values: Iterable[str],
        is_multivalue: bool = False,
        builtin_type: str = "",
        resolution: dict[str, Any] = None,
    ) -> FilledEntityMap:
        """Replace the entity's values. No non-empty values forgets the entity."""
        texts: list[str] = []
        for v in values:
            if v and v not in texts:
                texts.append(v)
        if not texts:
            return self.without_entity(name)
        if not is_multivalue:
            texts = texts[-1:]

        memory_values = tuple(
            MemoryValue(user_text=t, display_text=t, builtin_type=builtin_type,
                        resolution=resolution or {})
            for t in texts
        )
        return self.with_updated_entity(name, FilledEntity(entity_id=entity_id, values=memory_values))

    def forget(self, name: str, value: str = None, is_multivalue: bool = False) -> FilledEntityMap:
        """
        Forget a single value of a multi-value entity, or the whole entity.
        A multi-value entity left without values is removed.
        """
        filled_entity = self._entries.get(name)
        if filled_entity is None:
            return self

        if is_multivalue and value is not None:
            remaining = tuple(v for v in filled_entity.values if v.user_text != value)
            if remaining:
                return self.with_updated_entity(
                    name, FilledEntity(entity_id=filled_entity.entity_id, values=remaining),
                )
        logger.debug("entity_forgotten", name=name)
        return self.without_entity(name)

    def forget_negative(
        self,
        name: str,
        value: str = None,
        is_multivalue: bool = False,
        negative_prefix: str = "~",
    ) -> FilledEntityMap:
        """Forget the positive twin of a negative entity name (e.g. "~city")."""
        if not negative_prefix or not name.startswith(negative_prefix):
            return self
        return self.forget(name[len(negative_prefix):], value, is_multivalue)

    def clear(self, keep: Iterable[str] = None) -> FilledEntityMap:
        """New map holding only the names in ``keep`` (empty map by default)."""
        if keep is None:
            return FilledEntityMap()
        keep = set(keep)
        return FilledEntityMap({k: v for k, v in self._entries.items() if k in keep})

    # ── Export ────────────────────────────────────────────────

    def filled_entities(self) -> list[FilledEntity]:
        return list(self._entries.values())

    def to_id_map(self) -> FilledEntityMap:
        """The same records keyed by entity id. Records without an id are dropped."""
        return FilledEntityMap({
            fe.entity_id: fe for fe in self._entries.values() if fe.entity_id
        })

    def to_memory(self) -> list[Memory]:
        return [
            Memory(entity_name=name, entity_values=fe.values)
            for name, fe in self._entries.items()
        ]

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible dict using the camelCase wire names."""
        return {
            name: fe.model_dump(mode="json", by_alias=True)
            for name, fe in self._entries.items()
        }

    # ── Text ──────────────────────────────────────────────────

    @staticmethod
    def split(text: str) -> list[str]:
        return split_text(text)

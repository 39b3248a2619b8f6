"""
Action template substitution.

Action templates reference entities as ``$name``. Rendering replaces each
reference with the entity's remembered value, formatted the same way the
memory map renders it ("a, b and c").

A reference is the prefix followed by word characters, with single inner
hyphens allowed so that names like ``builtin-number`` resolve:

    "Flying to $city on $builtin-datetime."
"""
from __future__ import annotations

import re
from typing import Iterable

import structlog

from config.settings import MISSING_REFERENCE_POLICIES
from memory.errors import MissingEntityError
from memory.filled_entity import FilledEntityMap
from models.schemas import EntityDefinition
from utils.text import split

logger = structlog.get_logger()

_NAME = r"(\w+(?:-\w+)*)"


def _reference_pattern(prefix: str) -> re.Pattern:
    return re.compile(re.escape(prefix) + _NAME)


def referenced_entities(template: str, prefix: str = "$") -> list[str]:
    """Entity names referenced in the template, in order, without repeats."""
    pattern = _reference_pattern(prefix)
    names: list[str] = []
    for token in split(template):
        for match in pattern.finditer(token):
            if match.group(1) not in names:
                names.append(match.group(1))
    return names


def default_entity_map(definitions: Iterable[EntityDefinition], prefix: str = "$") -> dict[str, str]:
    """Entity id → placeholder text ("$name"), used before any value is known."""
    return {d.entity_id: f"{prefix}{d.entity_name}" for d in definitions}


def substitute(
    template: str,
    filled_entity_map: FilledEntityMap,
    prefix: str = "$",
    missing: str = "keep",
) -> str:
    """
    Replace ``$name`` references with remembered values.

    References without a value are handled by ``missing``:
      "keep":  leave the reference text as-is
      "blank": replace it with ""
      "error": raise MissingEntityError
    """
    if not template:
        return ""

    if missing not in MISSING_REFERENCE_POLICIES:
        raise ValueError(f"Unknown missing-reference policy '{missing}'")

    unresolved: list[str] = []

    def replacer(match):
        name = match.group(1)
        value = filled_entity_map.value_as_string(name)
        if value is not None:
            return value
        if missing == "error":
            raise MissingEntityError(name)
        unresolved.append(name)
        return "" if missing == "blank" else match.group(0)

    rendered = _reference_pattern(prefix).sub(replacer, template)
    if unresolved:
        logger.debug("unresolved_entity_references", names=unresolved, policy=missing)
    return rendered

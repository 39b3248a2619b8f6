"""
Action template rendering.

Action templates are plain text with ``$entity`` references. The
substitution layer fills them from a FilledEntityMap so previews and
chat transcripts show the values the bot currently remembers.
"""
from templates.substitution import (
    substitute, referenced_entities, default_entity_map,
)

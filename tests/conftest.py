"""Shared test fixtures for the entity memory."""
import pytest

from config.settings import reset_settings
from memory.filled_entity import FilledEntityMap
from models.schemas import EntityDefinition, FilledEntity, MemoryValue


@pytest.fixture
def make_filled_entity():
    """Factory for filled entities whose user and display text are the same."""
    def _make(values: list[str], entity_id: str = "") -> FilledEntity:
        return FilledEntity(
            entity_id=entity_id,
            values=[
                MemoryValue(user_text=v, display_text=v, builtin_type="", resolution={})
                for v in values
            ],
        )
    return _make


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def memory_values() -> list[MemoryValue]:
    return [
        MemoryValue(user_text="e1u1", display_text="e1d1", builtin_type="none", resolution={}),
        MemoryValue(user_text="e1u2", display_text="e1d2", builtin_type="none", resolution={}),
        MemoryValue(user_text="e1u3", display_text="e1d3", builtin_type="none", resolution={}),
    ]


@pytest.fixture
def filled_entity_map(memory_values) -> FilledEntityMap:
    """A map holding a single three-valued entity."""
    return FilledEntityMap.from_entries([
        ("entityName1", FilledEntity(entity_id="entityId1", values=memory_values)),
    ])


@pytest.fixture
def travel_map() -> FilledEntityMap:
    """A realistic booking turn: one filled, one multi-valued, one unfilled."""
    return FilledEntityMap.from_entries([
        ("city", "id-city", [{"userText": "seattle", "displayText": "Seattle"}]),
        ("toppings", "id-toppings", [
            {"userText": "cheese", "displayText": "cheese"},
            {"userText": "olives", "displayText": "olives"},
        ]),
        ("date", "id-date", []),
    ])


@pytest.fixture
def travel_definitions() -> list[EntityDefinition]:
    return [
        EntityDefinition(entity_id="id-city", entity_name="city", entity_type="LUIS"),
        EntityDefinition(entity_id="id-toppings", entity_name="toppings", is_multivalue=True),
        EntityDefinition(entity_id="id-date", entity_name="date", entity_type="datetimeV2"),
    ]

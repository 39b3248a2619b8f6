"""Tests for memory snapshot comparison."""
from memory.diff import are_equal_memory_values, changed_filled_entities
from memory.filled_entity import FilledEntityMap
from memory.transcript import TranscriptTurnMemory
from models.schemas import FilledEntity, MemoryValue


class TestAreEqualMemoryValues:
    def test_same_values_any_order(self):
        a = [MemoryValue(user_text="x"), MemoryValue(user_text="y")]
        b = [MemoryValue(user_text="y"), MemoryValue(user_text="x")]
        assert are_equal_memory_values(a, b)

    def test_length_mismatch(self):
        assert not are_equal_memory_values([MemoryValue(user_text="x")], [])

    def test_resolution_compared(self):
        a = [MemoryValue(user_text="3", resolution={"value": "3"})]
        b = [MemoryValue(user_text="3", resolution={"value": "4"})]
        assert not are_equal_memory_values(a, b)

    def test_builtin_type_compared(self):
        a = [MemoryValue(user_text="3", builtin_type="builtin.number")]
        b = [MemoryValue(user_text="3", builtin_type="")]
        assert not are_equal_memory_values(a, b)

    def test_display_text_compared(self):
        a = [MemoryValue(user_text="ny", display_text="New York")]
        b = [MemoryValue(user_text="ny", display_text="NY")]
        assert not are_equal_memory_values(a, b)

    def test_empty_lists_equal(self):
        assert are_equal_memory_values([], [])


class TestChangedFilledEntities:
    def test_no_changes(self, travel_map):
        assert changed_filled_entities(travel_map, travel_map) == []

    def test_emptied_new_and_changed(self, travel_map):
        new = (
            travel_map
            .forget("city")
            .remember("toppings", "id-toppings", "ham", is_multivalue=True)
            .remember("hotel", "id-hotel", "Hilton")
        )
        changed = changed_filled_entities(travel_map, new)
        assert changed[0] == FilledEntity(entity_id="id-city", values=())
        assert [fe.entity_id for fe in changed[1:]] == ["id-toppings", "id-hotel"]

    def test_unfilled_to_filled_is_a_change(self, travel_map):
        new = travel_map.remember("date", "id-date", "tomorrow")
        assert [fe.entity_id for fe in changed_filled_entities(travel_map, new)] == ["id-date"]


class TestTranscriptTurnMemory:
    def test_rendered_results(self, travel_map):
        turn = TranscriptTurnMemory(
            input_text="two pizzas to seattle",
            api_results=(travel_map, FilledEntityMap()),
        )
        rendered = turn.rendered_results()
        assert rendered[0] == {"city": "Seattle", "toppings": "cheese and olives", "date": None}
        assert rendered[1] == {}
        assert turn.predicted_entities is None

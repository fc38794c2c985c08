import pytest

from typertrack import PropertyBag, SerializableProperties
from sample_plan import (
    OrderCompleted,
    Planet,
    PropertyObjectNameCollision2,
    SampleEvent1,
    Tagged,
    Universe1,
)

pytestmark = pytest.mark.unit


def test_builder_has_one_setter_per_field():
    builder = OrderCompleted.Builder()
    for name in ("order_id", "total", "items"):
        assert callable(getattr(builder, name))
    assert OrderCompleted.Builder._target is OrderCompleted


def test_setter_stores_raw_value_under_wire_key():
    event = SampleEvent1.Builder().sample_property_1("hello").build()
    assert event.to_properties() == {"Sample property 1": "hello"}
    assert event.sample_property_1 == "hello"


def test_setter_with_none_stores_explicit_null():
    event = PropertyObjectNameCollision2.Builder().universe(None).build()
    bag = event.to_properties()
    assert "universe" in bag
    assert bag["universe"] is None


def test_unset_fields_are_absent():
    event = OrderCompleted.Builder().total(9.5).build()
    assert event.to_properties() == {"total": 9.5}
    assert event.order_id is None
    assert event.model_fields_set == {"total"}


def test_nested_object_is_converted_on_set():
    universe = Universe1.Builder().name("Milky Way").build()
    event = PropertyObjectNameCollision2.Builder().universe(universe).build()
    bag = event.to_properties()
    assert isinstance(bag["universe"], PropertyBag)
    assert bag["universe"] == universe.to_properties()
    assert event.universe is universe


def test_list_values_are_serialized_on_set():
    universe = Universe1.Builder().name("Andromeda").build()
    event = OrderCompleted.Builder().items([universe, [universe, 3], "x"]).build()
    assert event.to_properties()["items"] == [
        {"name": "Andromeda"},
        [{"name": "Andromeda"}, 3],
        "x",
    ]


def test_enum_members_travel_as_strings():
    universe = Universe1.Builder().planets([Planet.EARTH]).build()
    assert universe.to_properties()["planets"] == ["earth"]
    assert str(Planet.MARS) == "mars"


def test_build_without_any_setter_is_allowed():
    event = OrderCompleted.Builder().build()
    assert event.to_properties() == {}


def test_build_is_a_snapshot():
    builder = SampleEvent1.Builder().sample_property_1(1)
    first = builder.build()
    builder.sample_property_1(2)
    assert first.to_properties() == {"Sample property 1": 1}
    assert builder.build().to_properties() == {"Sample property 1": 2}


def test_built_objects_are_frozen():
    event = SampleEvent1.Builder().sample_property_1(1).build()
    with pytest.raises(Exception):
        event.sample_property_1 = 2


def test_direct_construction_converts_too():
    universe = Universe1(name="Milky Way")
    event = PropertyObjectNameCollision2(universe=universe)
    assert event.to_properties() == {"universe": {"name": "Milky Way"}}


def test_hand_written_setter_wins():
    event = Tagged.Builder().tag("beta").build()
    assert event.to_properties() == {"tag": "BETA"}


def test_field_named_build_is_rejected():
    with pytest.raises(TypeError):

        class Broken(SerializableProperties):
            build: str = ""


def test_subclass_inherits_and_extends_setters():
    class Child(Universe1):
        age: int = 0

    event = Child.Builder().name("x").age(3).build()
    assert isinstance(event, Child)
    assert event.to_properties() == {"name": "x", "age": 3}
    assert Universe1.Builder._target is Universe1
    assert not hasattr(Universe1.Builder(), "age")

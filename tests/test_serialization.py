import pytest

from typertrack import GeneratorContext, Options, PropertyBag, attach_context, serialize_list, to_plain
from sample_plan import Universe1

pytestmark = pytest.mark.unit


class RecordingOptions:
    """Host-side Options stand-in: anything with put_custom_context works."""

    def __init__(self):
        self.contexts = {"existing": {"keep": True}}

    def put_custom_context(self, name, context):
        self.contexts[name] = context


def universe(name):
    return Universe1.Builder().name(name).build()


def test_attach_context_without_options_creates_one(context):
    options = attach_context(context)
    assert isinstance(options, Options)
    assert dict(options.custom_contexts) == {
        "ruddertyper": {
            "sdk": "analytics-python",
            "language": "python",
            "rudderTyperVersion": "1.0.0-beta.8",
            "trackingPlanId": "trackingPlanId",
            "trackingPlanVersion": "2",
        }
    }


def test_attach_context_mutates_and_returns_same_object(context):
    options = RecordingOptions()
    returned = attach_context(context, options)
    assert returned is options
    assert options.contexts["existing"] == {"keep": True}
    assert dict(options.contexts["ruddertyper"]) == dict(context.as_mapping())


def test_attach_context_overwrites_previous_value(context):
    options = Options().put_custom_context("ruddertyper", {"sdk": "stale"})
    attach_context(context, options)
    assert options.custom_contexts["ruddertyper"]["sdk"] == "analytics-python"


def test_attach_context_honours_custom_key():
    ctx = GeneratorContext(
        sdk="s",
        generator_version="v",
        tracking_plan_id="tp",
        tracking_plan_version=3,
        context_key="generator",
    )
    options = attach_context(ctx)
    assert options.custom_contexts["generator"]["trackingPlanVersion"] == 3


def test_serialize_list_none_and_empty():
    assert serialize_list(None) is None
    assert serialize_list([]) == []


def test_serialize_list_passes_scalars_through():
    source = [1, "a", True, None, 2.5]
    result = serialize_list(source)
    assert result == [1, "a", True, None, 2.5]
    assert result is not source


def test_serialize_list_recurses_and_keeps_shape():
    a, b = universe("A"), universe("B")
    result = serialize_list([a, [b, 3]])
    assert result == [a.to_properties(), [b.to_properties(), 3]]
    assert isinstance(result[0], PropertyBag)
    assert isinstance(result[1], list)


def test_serialize_list_keeps_tuples_as_tuples():
    result = serialize_list((universe("A"), ("x",)))
    assert result == ({"name": "A"}, ("x",))
    assert isinstance(result, tuple)
    assert isinstance(result[1], tuple)


def test_strings_are_not_treated_as_sequences():
    assert serialize_list(["abc"]) == ["abc"]


def test_serializing_twice_is_a_no_op():
    once = serialize_list([universe("A"), [universe("B")]])
    assert serialize_list(once) == once


def test_to_plain_dispatch():
    a = universe("A")
    assert to_plain(a) == {"name": "A"}
    assert to_plain([a]) == [{"name": "A"}]
    assert to_plain(5) == 5
    bag = PropertyBag({"x": 1})
    assert to_plain(bag) is bag


def test_self_referencing_list_is_not_detected():
    loop = []
    loop.append(loop)
    with pytest.raises(RecursionError):
        serialize_list(loop)

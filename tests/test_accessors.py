"""
Tests for prop, identity and constant.
"""

from dataclasses import dataclass

from fnpipe import constant, identity, map, pipe, prop


@dataclass
class User:
    name: str
    age: int


# =============================================================================
# prop
# =============================================================================

class TestProp:

    def test_reads_dict_key(self):
        assert prop("name")({"name": "Alice", "age": 30}) == "Alice"

    def test_reads_attribute(self):
        assert prop("age")(User("Bob", 41)) == 41

    def test_missing_key_returns_none(self):
        assert prop("email")({"name": "Alice"}) is None

    def test_missing_attribute_returns_default(self):
        assert prop("email", default="n/a")(User("Bob", 41)) == "n/a"

    def test_reads_tuple_index(self):
        assert prop(0)(("a", "b")) == "a"
        assert prop(-1)(["a", "b"]) == "b"

    def test_missing_index_returns_default(self):
        assert prop(5)(("a",)) is None
        assert prop(5, default="?")(["a"]) == "?"

    def test_in_pipeline(self):
        users = [{"name": "Alice"}, {"name": "Bob"}]
        assert pipe(users, map(prop("name"))) == ["Alice", "Bob"]


# =============================================================================
# identity
# =============================================================================

class TestIdentity:

    def test_returns_value(self):
        assert identity(5) == 5

    def test_returns_same_object(self):
        data = {"a": [1]}
        assert identity(data) is data

    def test_none(self):
        assert identity(None) is None


# =============================================================================
# constant
# =============================================================================

class TestConstant:

    def test_ignores_argument(self):
        fn = constant(42)
        assert fn("anything") == 42
        assert fn(None) == 42

    def test_ignores_any_arguments(self):
        fn = constant("x")
        assert fn() == "x"
        assert fn(1, 2, key="value") == "x"

    def test_rebinding_does_not_change_result(self):
        value = 10
        fn = constant(value)
        value = 20
        assert fn(None) == 10
        assert value == 20

    def test_captures_by_reference(self):
        items = [1]
        fn = constant(items)
        items.append(2)
        assert fn(None) is items
        assert fn(None) == [1, 2]

    def test_snapshot_copies_at_construction(self):
        items = [1]
        fn = constant(items, snapshot=True)
        items.append(2)
        assert fn(None) == [1]
        assert fn(None) is fn("again")

    def test_in_pipeline(self):
        assert pipe("ignored", constant(7), lambda x: x * 6) == 42

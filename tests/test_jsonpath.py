# tests/test_jsonpath.py
"""
Test JSON path parsing, reading and writing.
"""

import pytest

from forwardhook.errors import StructuralConflict
from forwardhook.jsonpath import MISSING, Index, JsonPath, Key, parse_path, read, write


def p(*segments) -> JsonPath:
    return parse_path(list(segments))


class TestParsePath:
    """Tests for building paths from config literals."""

    def test_mixed_segments(self):
        """Strings become keys, integers become indexes."""
        path = parse_path(["todos", 0, "description"])

        assert path.segments == (Key("todos"), Index(0), Key("description"))
        assert path.to_list() == ["todos", 0, "description"]

    def test_empty_path_is_root(self):
        """An empty list refers to the whole document."""
        path = parse_path([])

        assert path.is_root()
        assert len(path) == 0
        assert str(path) == "$"

    def test_rendering(self):
        """Paths render in dotted/bracket form."""
        assert str(p("todos", 0, "description")) == "todos[0].description"
        assert str(p(1, "a")) == "[1].a"
        assert str(p("odd key")) == "['odd key']"

    @pytest.mark.parametrize("raw", [
        [True],
        [1.5],
        [2.0],
        [-1],
        [None],
        [["nested"]],
        [{"a": 1}],
    ])
    def test_invalid_elements_rejected(self, raw):
        """Only strings and non-negative integers are path elements."""
        with pytest.raises(ValueError):
            parse_path(raw)

    def test_non_list_rejected(self):
        """A bare string is not a path."""
        with pytest.raises(ValueError):
            parse_path("todos.0")

    def test_negative_index_segment_rejected(self):
        """Index segments cannot be negative."""
        with pytest.raises(ValueError):
            Index(-3)


class TestRead:
    """Tests for reading values at a path."""

    DOC = {
        "todos": [{"description": "Do the laundry", "done": False}],
        "owner": None,
        "tags": ["home", "chores"],
    }

    def test_empty_path_returns_document(self):
        """Reading the root returns the document itself."""
        assert read(self.DOC, p()) is self.DOC
        assert read(42, p()) == 42

    def test_nested_lookup(self):
        """Keys and indexes are followed in order."""
        assert read(self.DOC, p("todos", 0, "description")) == "Do the laundry"
        assert read(self.DOC, p("tags", 1)) == "chores"

    def test_falsy_values_are_found(self):
        """False and null leaves are values, not misses."""
        assert read(self.DOC, p("todos", 0, "done")) is False
        assert read(self.DOC, p("owner")) is None

    def test_absent_key_is_miss(self):
        assert read(self.DOC, p("nope")) is MISSING
        assert read(self.DOC, p("todos", 0, "due")) is MISSING

    def test_out_of_range_index_is_miss(self):
        assert read(self.DOC, p("todos", 1)) is MISSING
        assert read(self.DOC, p("tags", 5)) is MISSING

    def test_past_null_is_miss(self):
        """Nothing can be read through a null."""
        assert read(self.DOC, p("owner", "name")) is MISSING
        assert read(self.DOC, p("owner", 0)) is MISSING

    def test_kind_mismatch_is_miss(self):
        """A key on an array or an index on an object is a miss, not an error."""
        assert read(self.DOC, p("todos", "description")) is MISSING
        assert read(self.DOC, p(0)) is MISSING
        assert read(self.DOC, p("tags", 0, "x")) is MISSING
        assert read("scalar", p("a")) is MISSING

    def test_missing_is_falsy_singleton(self):
        assert not MISSING
        assert repr(MISSING) == "MISSING"


class TestWrite:
    """Tests for building output documents."""

    def test_round_trip_single_field(self):
        """A value read from one document and written at the same path reads back equal."""
        doc = {"todos": [{"description": "Do the laundry"}]}
        path = p("todos", 0, "description")

        out = write({}, path, read(doc, path))

        assert read(out, path) == "Do the laundry"
        assert out == {"todos": [{"description": "Do the laundry"}]}

    def test_creates_objects(self):
        assert write({}, p("a", "b", "c"), 1) == {"a": {"b": {"c": 1}}}

    def test_creates_arrays_padded_with_null(self):
        """Arrays are extended with nulls up to the written index."""
        assert write({}, p("a", 2), "x") == {"a": [None, None, "x"]}

    def test_sibling_keys_merge(self):
        """Two destinations under one object share it, in either order."""
        first = write(write({}, p("a", "b"), 1), p("a", "c"), 2)
        second = write(write({}, p("a", "c"), 2), p("a", "b"), 1)

        assert first == {"a": {"b": 1, "c": 2}}
        assert second == first

    def test_sibling_indexes_merge(self):
        """Indexes 0 and 1 produce one array of length 2, in either order."""
        first = write(write({}, p("a", 0), "x"), p("a", 1), "y")
        second = write(write({}, p("a", 1), "y"), p("a", 0), "x")

        assert first == {"a": ["x", "y"]}
        assert second == first

    def test_padding_slot_can_hold_container(self):
        """A null padding slot is filled by a later nested write."""
        out = write({}, p("items", 1, "id"), 7)
        write(out, p("items", 0, "id"), 6)

        assert out == {"items": [{"id": 6}, {"id": 7}]}

    def test_written_null_is_not_padding(self):
        """A null placed by an earlier write is kept, not replaced by a container."""
        out = write({}, p("a", 0), None)

        with pytest.raises(StructuralConflict) as exc_info:
            write(out, p("a", 0, "b"), 1)

        assert exc_info.value.at == p("a", 0)
        assert out == {"a": [None]}

    def test_copied_array_nulls_are_values(self):
        """Nulls inside an array copied from the input are values too."""
        out = write({}, p("list"), [None, 1])

        with pytest.raises(StructuralConflict):
            write(out, p("list", 0, "x"), 2)

        assert out == {"list": [None, 1]}

    def test_exact_collision_last_write_wins(self):
        out = write({}, p("a"), 1)
        write(out, p("a"), 2)

        assert out == {"a": 2}

    def test_value_is_copied(self):
        """Later writes never reach back into the source value."""
        source = {"k": [1]}
        out = write({}, p("x"), source)
        write(out, p("x", "extra"), True)

        assert source == {"k": [1]}
        assert out == {"x": {"k": [1], "extra": True}}

    def test_key_into_array_conflicts(self):
        """An object path through an existing array is a conflict."""
        out = write({}, p("a", 0), "x")

        with pytest.raises(StructuralConflict) as exc_info:
            write(out, p("a", "b"), 1)

        assert exc_info.value.path == p("a", "b")
        assert exc_info.value.at == p("a")
        assert out == {"a": ["x"]}

    def test_index_into_object_conflicts(self):
        out = write({}, p("a", "b"), 1)

        with pytest.raises(StructuralConflict):
            write(out, p("a", 0), "x")

    def test_through_scalar_conflicts(self):
        """A written scalar is never replaced by a container."""
        out = write({}, p("a"), "text")

        with pytest.raises(StructuralConflict) as exc_info:
            write(out, p("a", "b", "c"), 1)

        assert exc_info.value.at == p("a")
        assert out == {"a": "text"}

    def test_index_at_root_conflicts(self):
        """The output root is always an object."""
        with pytest.raises(StructuralConflict) as exc_info:
            write({}, p(0), "x")

        assert exc_info.value.at.is_root()

    def test_root_destination_rejected(self):
        """The document root cannot be replaced."""
        with pytest.raises(StructuralConflict):
            write({}, p(), {"a": 1})

    def test_conflict_detail(self):
        """Conflict details carry both paths in raw form."""
        out = write({}, p("a"), 1)

        with pytest.raises(StructuralConflict) as exc_info:
            write(out, p("a", "b"), 2)

        detail = exc_info.value.to_detail()
        assert detail["error"] == "structural_conflict"
        assert detail["path"] == ["a", "b"]
        assert detail["at"] == ["a"]

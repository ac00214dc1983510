#
# Printip - Traits Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import ctypes
import logging
from collections import OrderedDict, UserString, deque, namedtuple
from dataclasses import dataclass

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from printip.fixed import Int8, UInt32
from printip.traits import (
    Category,
    UnsupportedTypeError,
    classify,
    is_numeric_type,
    is_sequence_type,
    is_text_type,
    is_tuple_type,
    numeric_width,
    register,
    unregister,
    _classify,
)
from printip import traits


# Tests ----------------------------------------------------------------------------------------------------------------

Point = namedtuple("Point", "x y")


@dataclass
class Endpoint:
    host: str
    port: int


class TestClassify:
    @pytest.mark.parametrize(
        "tp, expected",
        [
            pytest.param(list, Category.SEQUENCE, id="list"),
            pytest.param(deque, Category.SEQUENCE, id="deque"),
            pytest.param(tuple, Category.TUPLE, id="tuple"),
            pytest.param(Point, Category.TUPLE, id="namedtuple"),
            pytest.param(str, Category.TEXT, id="str"),
            pytest.param(UserString, Category.TEXT, id="userstring"),
            pytest.param(UInt32, Category.NUMERIC, id="uint32"),
            pytest.param(Int8, Category.NUMERIC, id="int8"),
            pytest.param(ctypes.c_uint16, Category.NUMERIC, id="c_uint16"),
        ],
    )
    def test_builtin_shapes(self, tp, expected):
        """Classify the recognized shapes."""
        assert classify(tp) is expected

    def test_subclasses_follow_their_base(self):
        """Classify subclasses like their base shape."""

        class Octets(list):
            pass

        class Name(str):
            pass

        assert classify(Octets) is Category.SEQUENCE
        assert classify(Name) is Category.TEXT

    @pytest.mark.parametrize(
        "tp",
        [
            pytest.param(int, id="int"),
            pytest.param(bool, id="bool"),
            pytest.param(float, id="float"),
            pytest.param(bytes, id="bytes"),
            pytest.param(dict, id="dict"),
            pytest.param(OrderedDict, id="ordereddict"),
            pytest.param(set, id="set"),
            pytest.param(Endpoint, id="dataclass"),
            pytest.param(type(None), id="none"),
            pytest.param(ctypes.c_double, id="c_double"),
        ],
    )
    def test_rejects_unsupported(self, tp):
        """Reject types matching no category."""
        with pytest.raises(UnsupportedTypeError, match=r"cannot render") as excinfo:
            classify(tp)
        assert excinfo.value.type is tp
        assert isinstance(excinfo.value, TypeError)

    def test_plain_int_hint(self):
        """Suggest a fixed-width wrapper for plain int."""
        with pytest.raises(UnsupportedTypeError, match=r"UInt32"):
            classify(int)

    def test_rejects_non_class(self):
        with pytest.raises(TypeError, match=r"expects a class"):
            classify(42)

    def test_result_is_cached(self):
        """Compute each type once."""
        _classify.cache_clear()
        classify(list)
        classify(list)
        info = _classify.cache_info()
        assert info.hits >= 1
        assert info.misses == 1

    def test_logs_classification(self, caplog):
        _classify.cache_clear()
        with caplog.at_level(logging.DEBUG, logger="printip.traits"):
            classify(deque)
        assert "classified collections.deque as sequence" in caplog.text


class TestPredicates:
    def test_predicates_are_exact(self):
        """Each predicate matches its own shape only."""
        assert is_sequence_type(list) and not is_sequence_type(tuple)
        assert is_tuple_type(tuple) and not is_tuple_type(list)
        assert is_text_type(str) and not is_text_type(bytes)
        assert is_numeric_type(UInt32) and not is_numeric_type(int)

    def test_numeric_width(self):
        assert numeric_width(UInt32) == 4
        assert numeric_width(str) is None


class TestRegister:
    def test_register_sequence(self, registered):
        """Opt a custom iterable into SEQUENCE."""

        class Ring:
            def __iter__(self):
                return iter([1, 2])

        with pytest.raises(UnsupportedTypeError):
            classify(Ring)
        registered(Ring, Category.SEQUENCE)
        assert classify(Ring) is Category.SEQUENCE

    def test_register_numeric_with_width(self, registered):
        """Opt an __index__ type into NUMERIC with an explicit width."""

        class Port:
            def __index__(self):
                return 8080

        registered(Port, "numeric", width=2)
        assert classify(Port) is Category.NUMERIC
        assert numeric_width(Port) == 2

    def test_registration_inherited(self, registered):
        class Base:
            pass

        class Child(Base):
            pass

        registered(Base, Category.TEXT)
        assert classify(Child) is Category.TEXT

    @pytest.mark.parametrize(
        "category, width",
        [
            pytest.param(Category.NUMERIC, None, id="numeric-missing-width"),
            pytest.param(Category.NUMERIC, 0, id="numeric-zero-width"),
            pytest.param(Category.NUMERIC, True, id="numeric-bool-width"),
            pytest.param(Category.TEXT, 4, id="text-with-width"),
        ],
    )
    def test_invalid_width(self, category, width):
        class Anything:
            pass

        with pytest.raises(ValueError, match=r"width"):
            register(Anything, category, width=width)

    def test_invalid_category(self):
        class Anything:
            pass

        with pytest.raises(ValueError):
            register(Anything, "mapping")

    def test_register_requires_class(self):
        with pytest.raises(TypeError, match=r"must be a class"):
            register(UInt32(1), Category.NUMERIC, width=4)

    def test_unregister(self):
        """Remove a registration and its cached classification."""

        class Label:
            pass

        register(Label, Category.TEXT)
        assert classify(Label) is Category.TEXT
        unregister(Label)
        with pytest.raises(UnsupportedTypeError):
            classify(Label)
        unregister(Label)  # unknown types are ignored

    @pytest.mark.parametrize(
        "category",
        [
            pytest.param(Category.SEQUENCE, id="sequence"),
            pytest.param(Category.TUPLE, id="tuple"),
        ],
    )
    def test_rejects_non_iterable(self, category):
        """Refuse an aggregate registration for a type without __iter__."""

        class Opaque:
            pass

        with pytest.raises(UnsupportedTypeError, match=r"requires __iter__"):
            register(Opaque, category)
        with pytest.raises(UnsupportedTypeError):
            classify(Opaque)

    def test_rejects_numeric_without_index(self):
        """Refuse a NUMERIC registration for a type without __index__."""

        class Opaque:
            pass

        with pytest.raises(UnsupportedTypeError, match=r"requires __index__"):
            register(Opaque, Category.NUMERIC, width=4)
        with pytest.raises(UnsupportedTypeError):
            classify(Opaque)

    def test_numeric_ctypes_without_index(self, registered):
        """Accept ctypes scalars as NUMERIC, they are read through .value."""

        class Counter(ctypes.c_uint32):
            pass

        registered(Counter, Category.NUMERIC, width=2)
        assert numeric_width(Counter) == 2

    def test_stale_classification_not_served(self, registered, monkeypatch):
        """Drop a classification computed while the registry changed underneath it."""

        class Label(UserString):
            def __iter__(self):
                return iter(self.data)

        registered(Label, Category.SEQUENCE)
        original = traits.is_sequence_type
        calls = []

        def interleaved(tp):
            result = original(tp)
            if tp is Label and not calls:
                calls.append(tp)
                registered(Label, Category.TEXT)
            return result

        monkeypatch.setattr(traits, "is_sequence_type", interleaved)
        assert classify(Label) is Category.SEQUENCE
        assert classify(Label) is Category.TEXT


class TestPrecedence:
    def test_text_wins_over_numeric(self, registered):
        """Resolve a text-like type that is also byte-pattern representable to TEXT."""

        class Octet(UserString):
            def __index__(self):
                return int(self.data)

        registered(Octet, Category.NUMERIC, width=1)
        assert is_text_type(Octet)
        assert classify(Octet) is Category.TEXT

    def test_structural_shape_wins_over_registration(self, registered):
        """Keep the structural shape when a list subclass is registered elsewhere."""

        class Quad(list):
            pass

        registered(Quad, Category.TUPLE)
        assert classify(Quad) is Category.SEQUENCE

    def test_sequence_wins_over_text(self, registered):
        class Chars(list):
            pass

        registered(Chars, Category.TEXT)
        assert classify(Chars) is Category.SEQUENCE

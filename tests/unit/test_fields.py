from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from lib_structured_log.domain.fields import EMPTY_CHAIN, FieldChain, Fields

KEYS = st.text(min_size=1, max_size=4)
LAYER = st.dictionaries(KEYS, st.one_of(st.integers(), st.booleans(), st.text(max_size=5)), max_size=5)


def test_names_are_sorted() -> None:
    assert Fields({"zeta": 1, "alpha": 2, "mid": 3}).names() == ["alpha", "mid", "zeta"]


def test_get_returns_none_for_missing_names() -> None:
    fields = Fields({"present": 0})
    assert fields.get("present") == 0
    assert fields.get("absent") is None


def test_later_layers_override_earlier_layers() -> None:
    chain = EMPTY_CHAIN.append({"a": 1}).append({"a": 2})
    assert chain.merged() == {"a": 2}


def test_append_never_mutates_receiver() -> None:
    base = EMPTY_CHAIN.append({"shared": True})
    left = base.append({"side": "left"})
    right = base.append({"side": "right"})
    assert len(base) == 1
    assert left.merged()["side"] == "left"
    assert right.merged()["side"] == "right"
    assert base.merged() == {"shared": True}


def test_append_copies_the_layer() -> None:
    layer = {"k": "before"}
    chain = FieldChain().append(layer)
    layer["k"] = "after"
    assert chain.merged()["k"] == "before"


def test_merged_returns_fresh_mapping() -> None:
    chain = FieldChain().append({"k": 1})
    first = chain.merged()
    first["k"] = 99
    assert chain.merged() == {"k": 1}
    assert isinstance(chain.merged(), Fields)


@given(st.lists(LAYER, max_size=6))
def test_merge_is_last_writer_wins(layers) -> None:
    chain = EMPTY_CHAIN
    expected: dict[str, object] = {}
    for layer in layers:
        chain = chain.append(layer)
        expected.update(layer)
    assert chain.merged() == expected


@given(st.lists(LAYER, max_size=6))
def test_merge_is_idempotent(layers) -> None:
    chain = EMPTY_CHAIN
    for layer in layers:
        chain = chain.append(layer)
    assert chain.merged() == chain.merged()
    assert [dict(layer) for layer in chain] == layers

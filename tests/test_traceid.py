import string

from kate import traceid


def test_new_is_hex_and_unique():
    ids = {traceid.new() for _ in range(100)}
    assert len(ids) == 100
    for trace_id in ids:
        assert set(trace_id) <= set(string.hexdigits.lower())


def test_extract_missing_returns_empty():
    assert traceid.extract({}) == ""
    assert traceid.extract(None) == ""


def test_round_trip():
    trace_id = traceid.new()
    ctx = traceid.to_context(None, trace_id)
    assert traceid.extract(ctx) == trace_id


def test_to_context_keeps_parent_values_and_parent_unchanged():
    parent = {"user": "alice"}
    ctx = traceid.to_context(parent, "abc")
    assert ctx["user"] == "alice"
    assert traceid.extract(ctx) == "abc"
    assert traceid.extract(parent) == ""


def test_inner_context_overrides():
    outer = traceid.to_context(None, "outer")
    inner = traceid.to_context(outer, "inner")
    assert traceid.extract(outer) == "outer"
    assert traceid.extract(inner) == "inner"
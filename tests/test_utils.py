from paltree.utils import apply_variables, merge


def test_merge_nested():
    assert merge({"a": {"b": 1}}, {"a": {"c": 2}}) == {"a": {"b": 1, "c": 2}}


def test_merge_lists():
    assert merge({"a": [1]}, {"a": [2]}) == {"a": [1, 2]}
    assert merge({"a": [1]}, {"a": [2]}, replace=True) == {"a": [2]}


def test_merge_overrides_scalars():
    merged = {"a": 1, "b": {"c": "x"}}
    result = merge(merged, {"a": 2, "b": {"c": "y"}})
    assert result is merged
    assert merged == {"a": 2, "b": {"c": "y"}}


def test_apply_variables():
    assert apply_variables("firefox [args]", {"args": "'a b'"}) == "firefox 'a b'"
    assert apply_variables("[unknown] [args]", {"args": "x"}) == "[unknown] x"
    assert apply_variables("no variables", {}) == "no variables"

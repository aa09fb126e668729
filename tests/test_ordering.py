import logging

from kontext.ordering import cursor_position, order_names


def test_empty_list():
    """Test ordering an empty list"""
    assert order_names([], "", True) == []
    assert order_names([], "anything", False) == []


def test_sorts_without_prioritizing():
    """Test names are sorted when the current one is not prioritized"""
    names = ["staging", "dev", "production", "aws-east"]
    assert order_names(names, "", False) == ["aws-east", "dev", "production", "staging"]


def test_current_ignored_when_not_prioritized():
    names = ["b", "c", "a"]
    assert order_names(names, "c", False) == ["a", "b", "c"]


def test_current_moves_to_front():
    """Test the current name is moved to the front"""
    names = ["staging", "dev", "production", "aws-east"]
    ordered = order_names(names, "production", True)
    assert ordered[0] == "production"
    assert ordered[1:] == ["aws-east", "dev", "staging"]


def test_input_not_mutated():
    """Test the input list is left as it was"""
    names = ["c", "a", "b"]
    order_names(names, "b", True)
    assert names == ["c", "a", "b"]


def test_plain_code_point_order():
    """Uppercase sorts before lowercase, no locale collation"""
    assert order_names(["beta", "Alpha", "alpha", "Beta"]) == ["Alpha", "Beta", "alpha", "beta"]


def test_duplicates_kept():
    assert order_names(["b", "a", "b"], "b", True) == ["b", "a", "b"]


def test_missing_current_returns_sorted(caplog):
    """Test a current name not in the list only logs"""
    with caplog.at_level(logging.INFO, logger="kontext.ordering"):
        ordered = order_names(["b", "a"], "zzz", True)
    assert ordered == ["a", "b"]
    assert "zzz" in caplog.text


def test_deterministic():
    names = ["kube-system", "default", "kube-public", "app"]
    assert order_names(names, "default", True) == order_names(list(names), "default", True)


def test_cursor_position():
    """Test finding the cursor position of the current name"""
    assert cursor_position(["a", "b", "c"], "b") == 1
    assert cursor_position(["a", "b", "c"], "missing") == 0
    assert cursor_position([], "") == 0

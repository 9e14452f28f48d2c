from kate.search import find_first, find_last

VALUES = [1, 2, 3, 4, 6, 7, 9]


def test_find_first():
    n = len(VALUES)
    offset = find_first(n, lambda i: VALUES[i] >= 5)
    assert 0 <= offset < n
    assert VALUES[offset] == 6


def test_find_last():
    n = len(VALUES)
    offset = find_last(n, lambda i: VALUES[i] <= 8)
    assert 0 <= offset < n
    assert VALUES[offset] == 7


def test_not_found():
    n = len(VALUES)
    assert find_first(n, lambda i: VALUES[i] > 100) == n
    assert find_last(n, lambda i: VALUES[i] < 0) == -1


def test_empty_range():
    assert find_first(0, lambda i: True) == 0
    assert find_last(0, lambda i: True) == -1
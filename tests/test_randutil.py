import pytest

from kate.randutil import (
    LETTERS_ALPHA,
    LETTERS_NUMBER,
    fast_uuid,
    fast_uuid_str,
    rand_between,
    rand_string,
)


def test_rand_string():
    s = rand_string(10, LETTERS_NUMBER)
    assert len(s) == 10
    assert all(ch in LETTERS_NUMBER for ch in s)


def test_rand_string_alpha():
    s = rand_string(50, LETTERS_ALPHA)
    assert len(s) == 50
    assert s.isalpha()


def test_rand_string_only_first_64_letters():
    letters = "a" * 64 + "b"
    assert set(rand_string(200, letters)) == {"a"}


def test_rand_string_errors():
    assert rand_string(0, "") == ""
    with pytest.raises(ValueError):
        rand_string(-1, LETTERS_NUMBER)
    with pytest.raises(ValueError):
        rand_string(3, "")


def test_rand_between():
    values = {rand_between(3, 7) for _ in range(500)}
    assert values <= {3, 4, 5, 6}
    with pytest.raises(ValueError):
        rand_between(5, 5)


def test_fast_uuid_unique():
    ids = [fast_uuid() for _ in range(1000)]
    assert all(len(i) == 24 for i in ids)
    assert len(set(ids)) == len(ids)
    assert len({i[8:] for i in ids}) == 1


def test_fast_uuid_str():
    s = fast_uuid_str()
    assert len(s) == 48
    assert bytes.fromhex(s).hex() == s
    assert fast_uuid_str() != s
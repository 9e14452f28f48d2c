import pytest

from kate.files import count_line, is_file_exists, touch_file


def test_count_line(tmp_path):
    path = tmp_path / "data.txt"
    path.write_bytes(b"a\nb\nc\n")
    assert count_line(path) == 3


def test_count_line_without_trailing_newline(tmp_path):
    path = tmp_path / "data.txt"
    path.write_bytes(b"a\nb")
    assert count_line(path) == 1


def test_count_line_large_file(tmp_path):
    path = tmp_path / "big.txt"
    path.write_bytes(b"x" * 100 + (b"line\n" * 20000))
    assert count_line(path) == 20000


def test_count_line_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        count_line(tmp_path / "missing.txt")


def test_touch_file_creates_and_truncates(tmp_path):
    path = tmp_path / "touched"
    touch_file(path)
    assert path.read_bytes() == b""
    path.write_bytes(b"content")
    touch_file(path)
    assert path.read_bytes() == b""


def test_is_file_exists(tmp_path):
    path = tmp_path / "f"
    assert is_file_exists(path) is False
    path.write_text("x")
    assert is_file_exists(path) is True
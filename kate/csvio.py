"""CSV file reader and writer."""

from __future__ import annotations

import csv
import logging
import os
from typing import Iterable, Iterator, Sequence

from .files import count_line

__all__ = ["Reader", "Writer"]


class Reader:
    """Reads records from a CSV file, skipping `skip_line` leading records.

    Blank lines are ignored, and every record must have as many fields as
    the first one read.
    """

    def __init__(self, file_name: str | os.PathLike, skip_line: int = 0) -> None:
        self.file_name = os.fspath(file_name)
        self._file = open(self.file_name, newline="", encoding="utf-8")
        self._rows = csv.reader(self._file)
        self._fields: int | None = None
        try:
            for _ in range(skip_line):
                try:
                    self.read()
                except EOFError:
                    break
        except Exception:
            self._file.close()
            raise

    def read(self) -> list[str]:
        """Return the next record; raise EOFError at the end of the file."""
        for row in self._rows:
            if not row:
                continue
            if self._fields is None:
                self._fields = len(row)
            elif len(row) != self._fields:
                raise csv.Error(
                    f"record on line {self._rows.line_num}: wrong number of fields"
                )
            return row
        raise EOFError("end of csv file")

    def __iter__(self) -> Iterator[list[str]]:
        while True:
            try:
                yield self.read()
            except EOFError:
                return

    def count(self) -> int:
        """Return the number of lines in the file."""
        return count_line(self.file_name)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> Reader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class Writer:
    """Writes records to a new CSV file, creating parent directories."""

    def __init__(self, file_name: str | os.PathLike, logger: logging.Logger | None = None) -> None:
        self.file_name = os.fspath(file_name)
        directory = os.path.dirname(self.file_name)
        if directory:
            os.makedirs(directory, mode=0o755, exist_ok=True)
        self._file = open(self.file_name, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file, lineterminator="\n")
        self._logger = logger or logging.getLogger(__name__)

    def write(self, record: Sequence[str]) -> None:
        """Write one record."""
        self._writer.writerow(record)

    def write_all(self, records: Iterable[Sequence[str]]) -> None:
        """Write all records and flush them to the file."""
        self._writer.writerows(records)
        self._file.flush()

    def close(self) -> None:
        """Flush buffered records and close the file."""
        try:
            self._file.flush()
        except OSError:
            self._logger.exception("flushing csv writer: file=%s", self.file_name)
        self._file.close()

    def __enter__(self) -> Writer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
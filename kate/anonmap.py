"""Anonymous private memory mappings viewed as bytes, uint64 or float32 arrays."""

from __future__ import annotations

import mmap

__all__ = ["AnonymousMap"]


class AnonymousMap:
    """A zero-filled anonymous memory region of `size` bytes.

    Views handed out stay valid until `close`, which invalidates them.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("size must be positive")
        self.size = size
        self._map = mmap.mmap(-1, size)
        self._views: list[memoryview] = []

    def _view(self, itemsize: int, fmt: str) -> memoryview:
        if self._map.closed:
            raise ValueError("mapping is closed")
        length = self.size // itemsize * itemsize
        base = memoryview(self._map)
        view = base[:length].cast(fmt) if fmt != "B" else base
        self._views.append(base)
        if view is not base:
            self._views.append(view)
        return view

    def to_byte_slice(self) -> memoryview:
        """Return a writable byte view of the whole region."""
        return self._view(1, "B")

    def to_uint64_slice(self) -> memoryview:
        """Return a view of the region as native unsigned 64-bit integers."""
        return self._view(8, "Q")

    def to_float32_slice(self) -> memoryview:
        """Return a view of the region as native 32-bit floats."""
        return self._view(4, "f")

    def close(self) -> None:
        """Release every view and unmap the region."""
        for view in reversed(self._views):
            view.release()
        self._views.clear()
        self._map.close()

    def __enter__(self) -> AnonymousMap:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
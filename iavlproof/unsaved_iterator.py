"""Iteration over saved key/value pairs merged with unsaved changes."""

from __future__ import annotations

from typing import Collection, Iterable, Iterator, Mapping, Optional, Tuple

Pair = Tuple[bytes, bytes]


class UnsavedFastIterator:
    """Iterates the latest state: pairs from disk merged with pending changes.

    ``disk_iterator`` yields saved (key, value) pairs sorted in the requested
    order. ``additions`` maps unsaved keys to their new values and takes
    precedence over the saved copy; keys in ``removals`` are skipped when
    they come from disk. Only keys in ``[start, end)`` are yielded; a bound
    of None is open.
    """

    def __init__(
        self,
        start: Optional[bytes],
        end: Optional[bytes],
        ascending: bool,
        disk_iterator: Iterable[Pair],
        additions: Optional[Mapping[bytes, bytes]],
        removals: Optional[Collection[bytes]],
    ) -> None:
        if disk_iterator is None:
            raise ValueError("unsaved fast iterator must be created with a disk iterator")
        if additions is None:
            raise ValueError(
                "unsaved fast iterator must be created with unsaved additions but they were nil"
            )
        if removals is None:
            raise ValueError(
                "unsaved fast iterator must be created with unsaved removals but they were nil"
            )
        self._start = start
        self._end = end
        self._ascending = ascending
        self._disk = disk_iterator
        self._additions = {bytes(k): v for k, v in additions.items()}
        self._removals = removals
        self._unsaved = sorted(
            (key for key in self._additions if self._in_domain(key)),
            reverse=not ascending,
        )
        self._closed = False
        self._pairs = self._merge()

    def _in_domain(self, key: bytes) -> bool:
        if self._start is not None and key < self._start:
            return False
        if self._end is not None and key >= self._end:
            return False
        return True

    def _disk_pairs(self) -> Iterator[Pair]:
        for key, value in self._disk:
            if self._in_domain(key):
                yield key, value

    def _merge(self) -> Iterator[Pair]:
        if self._start is not None and self._end is not None and self._end <= self._start:
            return
        disk = self._disk_pairs()
        disk_item = next(disk, None)
        unsaved = iter(self._unsaved)
        unsaved_key = next(unsaved, None)

        while disk_item is not None or unsaved_key is not None:
            if disk_item is not None and disk_item[0] in self._removals:
                disk_item = next(disk, None)
                continue
            if disk_item is None:
                yield unsaved_key, self._additions[unsaved_key]
                unsaved_key = next(unsaved, None)
                continue
            if unsaved_key is None:
                yield disk_item
                disk_item = next(disk, None)
                continue

            disk_key = disk_item[0]
            if self._ascending:
                unsaved_next = disk_key >= unsaved_key
            else:
                unsaved_next = disk_key <= unsaved_key

            if unsaved_next:
                if disk_key == unsaved_key:
                    # The unsaved value replaces the saved copy.
                    disk_item = next(disk, None)
                yield unsaved_key, self._additions[unsaved_key]
                unsaved_key = next(unsaved, None)
            else:
                yield disk_item
                disk_item = next(disk, None)

    def domain(self) -> Tuple[Optional[bytes], Optional[bytes]]:
        """Return the (start, end) bounds of the iteration."""
        return self._start, self._end

    def close(self) -> None:
        """Stop the iteration and release the disk iterator."""
        self._closed = True
        self._pairs.close()
        close = getattr(self._disk, "close", None)
        if callable(close):
            close()

    def __iter__(self) -> "UnsavedFastIterator":
        return self

    def __next__(self) -> Pair:
        if self._closed:
            raise StopIteration
        return next(self._pairs)

    def __enter__(self) -> "UnsavedFastIterator":
        return self

    def __exit__(self, *args) -> None:
        self.close()
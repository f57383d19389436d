"""Tree options and runtime cache statistics."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional

DEFAULT_FLUSH_THRESHOLD = 100_000


class Statistics:
    """Counters of node cache hits and misses, safe to update from several threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache_hit = 0
        self._cache_miss = 0
        self._fast_cache_hit = 0
        self._fast_cache_miss = 0

    @property
    def cache_hit(self) -> int:
        """Times a node lookup was served from the node cache."""
        return self._cache_hit

    @property
    def cache_miss(self) -> int:
        """Times a node lookup missed the node cache."""
        return self._cache_miss

    @property
    def fast_cache_hit(self) -> int:
        """Times a fast node lookup was served from the fast node cache."""
        return self._fast_cache_hit

    @property
    def fast_cache_miss(self) -> int:
        """Times a fast node lookup missed the fast node cache."""
        return self._fast_cache_miss

    def inc_cache_hit(self) -> None:
        with self._lock:
            self._cache_hit += 1

    def inc_cache_miss(self) -> None:
        with self._lock:
            self._cache_miss += 1

    def inc_fast_cache_hit(self) -> None:
        with self._lock:
            self._fast_cache_hit += 1

    def inc_fast_cache_miss(self) -> None:
        with self._lock:
            self._fast_cache_miss += 1

    def reset(self) -> None:
        """Set every counter back to zero."""
        with self._lock:
            self._cache_hit = 0
            self._cache_miss = 0
            self._fast_cache_hit = 0
            self._fast_cache_miss = 0

    def __repr__(self) -> str:
        return (
            f"Statistics(cache_hit={self._cache_hit}, cache_miss={self._cache_miss}, "
            f"fast_cache_hit={self._fast_cache_hit}, "
            f"fast_cache_miss={self._fast_cache_miss})"
        )


Option = Callable[["Options"], None]


@dataclass
class Options:
    """Tree options.

    sync: flush every write to storage synchronously.
    initial_version: version number used by the first save of an empty tree.
    stat: statistics collector, or None to collect nothing.
    flush_threshold: batch size in bytes after which writes are flushed.
    """

    sync: bool = False
    initial_version: int = 0
    stat: Optional[Statistics] = None
    flush_threshold: int = DEFAULT_FLUSH_THRESHOLD

    def apply(self, *options: Option) -> "Options":
        """Apply option functions in order and return self."""
        for option in options:
            option(self)
        return self


def default_options() -> Options:
    """Return the default options."""
    return Options(flush_threshold=DEFAULT_FLUSH_THRESHOLD)


def sync_option(sync: bool) -> Option:
    def _set(opts: Options) -> None:
        opts.sync = bool(sync)

    return _set


def initial_version_option(version: int) -> Option:
    if version < 0:
        raise ValueError(f"initial version must not be negative, got {version}")

    def _set(opts: Options) -> None:
        opts.initial_version = version

    return _set


def stat_option(stats: Optional[Statistics]) -> Option:
    def _set(opts: Options) -> None:
        opts.stat = stats

    return _set


def flush_threshold_option(threshold: int) -> Option:
    def _set(opts: Options) -> None:
        opts.flush_threshold = threshold

    return _set
"""CachingMap: a mapping decorator remembering the most recent key probe.

The idiom this serves is the probe-then-fetch pair::

    if key in cache:
        value = cache[key]
        ...
    else:
        ...

``key in cache`` looks the key up in the delegate once and remembers the
key object together with the value it resolved to. A following
``cache[key]`` (or ``cache.get(key)``) for the *same key object* returns the
remembered value without a second delegate lookup.

The remembered key is matched by identity (``is``), never by equality. A
key that is equal to the probed one but a different object always goes to
the delegate.

Caveats:
    - If the delegate's entry for the probed key changes or disappears
      between the probe and the fetch without going through this wrapper,
      the fetch returns the old value. Call ``invalidate()`` after mutating
      the delegate directly.
    - ``None`` is not a valid key or value. A probed key whose delegate value
      is ``None`` counts as absent, and mutating operations reject ``None``
      with ``InvalidArgumentError``.
    - ``contains_value()`` always returns ``False``.
    - Instances hold unsynchronised state and must not be shared between
      threads without external locking.
"""

from __future__ import annotations

import logging
from collections.abc import ItemsView, Iterator, KeysView, Mapping, MutableMapping, ValuesView
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog

from caching_map.exceptions import InvalidArgumentError

logger = structlog.get_logger()

K = TypeVar("K")
V = TypeVar("V")

_MISSING: Any = object()


@dataclass(frozen=True, eq=False, slots=True)
class _Probe:
    """Outcome of the most recent ``contains_key`` call."""

    key: Any
    value: Any
    found: bool


class CachingMap(MutableMapping[K, V]):
    """MutableMapping over a delegate that caches the last probed key's value.

    Args:
        delegate: Mapping receiving every operation. It stays the source of
            truth; the wrapper only forwards to it.
        name: Name bound to this instance's log events.
    """

    def __init__(self, delegate: MutableMapping[K, V], name: str = "caching_map") -> None:
        self._delegate = delegate
        self._probe: _Probe | None = None
        if structlog.is_configured():
            self._log = logger.bind(map_name=name)
        else:
            # structlog's defaults print every level; keep debug events quiet
            self._log = structlog.wrap_logger(
                None, wrapper_class=structlog.make_filtering_bound_logger(logging.INFO)
            ).bind(map_name=name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._delegate!r})"

    # Size

    def __len__(self) -> int:
        return len(self._delegate)

    def is_empty(self) -> bool:
        return len(self._delegate) == 0

    def __iter__(self) -> Iterator[K]:
        return iter(self._delegate)

    # Probe and fetch

    def contains_key(self, key: Any) -> bool:
        """Look ``key`` up once and remember the outcome for a following fetch.

        The remembered probe is replaced unconditionally, whether or not the
        key was found. Exceptions from the delegate lookup leave the previous
        probe in place.
        """
        value = self._delegate.get(key)
        found = value is not None
        self._probe = _Probe(key=key, value=value, found=found)
        self._log.debug("probe_cached", found=found)
        return found

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` when it is absent.

        Served from the remembered probe when ``key`` is the probed object,
        without consulting the delegate. Any other key drops the probe first.
        """
        probe = self._probe
        if probe is not None and probe.key is key:
            self._log.debug("probe_hit", found=probe.found)
            return probe.value if probe.found else default

        self._drop_probe("get")
        return self._delegate.get(key, default)

    def __getitem__(self, key: K) -> V:
        probe = self._probe
        if probe is not None and probe.key is key:
            self._log.debug("probe_hit", found=probe.found)
            if not probe.found:
                raise KeyError(key)
            return probe.value

        self._drop_probe("get")
        return self._delegate[key]

    def contains_value(self, value: object) -> bool:
        """Always ``False``; the delegate's values are never searched."""
        return False

    # Mutation

    def put(self, key: K, value: V) -> V | None:
        """Map ``key`` to ``value`` and return the previous value, if any."""
        self._require("put", key=key, value=value)
        if self._is_probed(key):
            self._drop_probe("put")

        previous = self._delegate.get(key)
        self._delegate[key] = value
        return previous

    def __setitem__(self, key: K, value: V) -> None:
        self._require("put", key=key, value=value)
        if self._is_probed(key):
            self._drop_probe("put")
        self._delegate[key] = value

    def remove(self, key: K) -> V | None:
        """Remove ``key`` and return its previous value, or ``None`` if unmapped."""
        self._require("remove", key=key)
        if self._is_probed(key):
            self._drop_probe("remove")
        return self._delegate.pop(key, None)

    def __delitem__(self, key: K) -> None:
        self._require("remove", key=key)
        if self._is_probed(key):
            self._drop_probe("remove")
        del self._delegate[key]

    def pop(self, key: K, default: Any = _MISSING) -> Any:
        self._require("pop", key=key)
        if self._is_probed(key):
            self._drop_probe("remove")
        if default is _MISSING:
            return self._delegate.pop(key)
        return self._delegate.pop(key, default)

    def clear(self) -> None:
        self._drop_probe("clear")
        self._delegate.clear()

    def put_all(self, other: Mapping[K, V]) -> None:
        """Copy every entry of ``other`` into the delegate.

        The probe is dropped when its key is a key of ``other``, as judged by
        ``other``'s own containment test.
        """
        for key, value in other.items():
            self._require("put_all", key=key, value=value)
        probe = self._probe
        if probe is not None and probe.key in other:
            self._drop_probe("put_all")
        self._delegate.update(other)

    def update(self, other: Any = (), /, **kwargs: Any) -> None:
        if isinstance(other, Mapping):
            entries = other
        elif hasattr(other, "keys"):
            entries = {key: other[key] for key in other.keys()}
        else:
            entries = dict(other)
        for key, value in kwargs.items():
            self._require("put_all", key=key, value=value)

        self.put_all(entries)
        if kwargs:
            self.put_all(kwargs)

    def invalidate(self) -> None:
        """Forget the remembered probe.

        Use after mutating the delegate directly, bypassing this wrapper.
        """
        self._drop_probe("invalidate")

    # Live delegate views; mutations through them bypass the probe.

    def keys(self) -> KeysView[K]:
        return self._delegate.keys()

    def values(self) -> ValuesView[V]:
        return self._delegate.values()

    def items(self) -> ItemsView[K, V]:
        return self._delegate.items()

    # Internals

    def _is_probed(self, key: object) -> bool:
        return self._probe is not None and self._probe.key is key

    def _drop_probe(self, reason: str) -> None:
        if self._probe is None:
            return
        self._probe = None
        self._log.debug("probe_invalidated", reason=reason)

    def _require(self, operation: str, **arguments: object) -> None:
        for argument, value in arguments.items():
            if value is None:
                self._log.warning("invalid_argument", operation=operation, argument=argument)
                raise InvalidArgumentError(operation, argument)

"""Immutable, partitioned assertion catalog."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from ..errors import DuplicateAssertionError, InvalidAssertionError
from .assertion import Assertion
from .parts import Phrase, Slot

logger = logging.getLogger(__name__)


def _flatten(items: Iterable[Any]) -> Iterator[Assertion]:
    for item in items:
        if isinstance(item, Assertion):
            yield item
        elif isinstance(item, (Catalog, list, tuple)):
            yield from _flatten(item)
        else:
            raise InvalidAssertionError(f"Cannot register {item!r}; expected an assertion or a collection of them")


def _shape(assertion: Assertion) -> tuple[Any, ...]:
    return tuple(part.name if isinstance(part, Slot) else None for part in assertion.parts)


def _collides(left: Assertion, right: Assertion) -> bool:
    if left.is_async != right.is_async or _shape(left) != _shape(right):
        return False
    for mine, theirs in zip(left.parts, right.parts):
        if isinstance(mine, Phrase) and not set(mine.values) & set(theirs.values):
            return False
    return True


class Catalog:
    """An ordered, immutable collection of assertions.

    Assertions are split into a synchronous and an asynchronous partition and
    indexed by the phrase tokens at the phrase position. Composition returns a
    new catalog and never mutates an existing one.

    Raises
    ------
    DuplicateAssertionError
        If two assertions share an id, or have the same slot shape and
        overlapping phrases at every phrase position.
    """

    __slots__ = ("_assertions", "_index")

    def __init__(self, assertions: Iterable[Any] = ()) -> None:
        ordered = tuple(_flatten(assertions))
        seen: dict[str, Assertion] = {}
        index: dict[tuple[bool, str], list[Assertion]] = {}
        for assertion in ordered:
            if assertion.id in seen:
                raise DuplicateAssertionError(f"Duplicate assertion id {assertion.id!r}", ids=(assertion.id,))
            for token in assertion.phrase.values:
                for other in index.get((assertion.is_async, token), ()):
                    if other.id != assertion.id and _collides(other, assertion):
                        raise DuplicateAssertionError(
                            f"Assertion {assertion.id!r} collides with {other.id!r} on phrase {token!r}",
                            ids=(other.id, assertion.id),
                        )
            seen[assertion.id] = assertion
            for token in assertion.phrase.values:
                bucket = index.setdefault((assertion.is_async, token), [])
                if assertion not in bucket:
                    bucket.append(assertion)
        self._assertions = ordered
        self._index = {key: tuple(bucket) for key, bucket in index.items()}

    def compose(self, *items: Any) -> Catalog:
        """Return a new catalog with ``items`` appended."""
        catalog = Catalog((self._assertions, *items))
        logger.debug("Composed catalog: %d -> %d assertions", len(self), len(catalog))
        return catalog

    def candidates(self, token: Any, *, is_async: bool) -> tuple[Assertion, ...]:
        """Assertions whose phrase position accepts ``token``."""
        if not isinstance(token, str):
            return ()
        return self._index.get((is_async, token), ())

    def has_phrase(self, token: Any, *, is_async: bool) -> bool:
        return bool(self.candidates(token, is_async=is_async))

    def phrases(self, *, is_async: bool) -> list[str]:
        return [token for partition, token in self._index if partition is is_async]

    @property
    def sync_assertions(self) -> tuple[Assertion, ...]:
        return tuple(assertion for assertion in self._assertions if not assertion.is_async)

    @property
    def async_assertions(self) -> tuple[Assertion, ...]:
        return tuple(assertion for assertion in self._assertions if assertion.is_async)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(assertion.id for assertion in self._assertions)

    def __iter__(self) -> Iterator[Assertion]:
        return iter(self._assertions)

    def __len__(self) -> int:
        return len(self._assertions)

    def __contains__(self, item: object) -> bool:
        return item in self._assertions

    def __repr__(self) -> str:
        return f"Catalog({len(self.sync_assertions)} sync, {len(self.async_assertions)} async)"

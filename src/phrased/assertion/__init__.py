"""Assertion records, catalog, matching and execution."""

from .assertion import (
    Assertion,
    ImplementationStyle,
    assertion_id,
    create_assertion,
    create_async_assertion,
)
from .catalog import Catalog
from .executor import execute, execute_async
from .matcher import MatchCandidate, match_assertion, resolve
from .negation import apply_negation, split_negation
from .parts import Phrase, Slot, phrase, slot


__all__ = [
    "Assertion",
    "Catalog",
    "ImplementationStyle",
    "MatchCandidate",
    "Phrase",
    "Slot",
    "apply_negation",
    "assertion_id",
    "create_assertion",
    "create_async_assertion",
    "execute",
    "execute_async",
    "match_assertion",
    "phrase",
    "resolve",
    "slot",
    "split_negation",
]

"""Phrased - natural-language assertions for Python tests."""

from .assertion import (
    Assertion,
    Catalog,
    ImplementationStyle,
    Phrase,
    Slot,
    create_assertion,
    create_async_assertion,
)
from .builtins import BUILTIN_ASSERTIONS
from .config import PhrasedSettings, get_settings
from .context import outcomes_collector
from .embed import EmbeddedAssertion
from .errors import (
    AmbiguousAssertionError,
    AssertionImplementationError,
    DispatchError,
    DoubleNegationError,
    DuplicateAssertionError,
    InvalidAssertionError,
    PhrasedError,
    SynthesisError,
    UnexpectedAsyncError,
    UnknownAssertionError,
    ValidationFailure,
)
from .expect import Expect
from .outcome import AssertionFailure, Diagnostic, ValidationOutcome
from .schema import EXHAUSTIVE_OPTIONS, SATISFY_OPTIONS, SHAPE_OPTIONS, SynthesisOptions, Validator, synthesize
from .version import __version__


expect = Expect(Catalog(BUILTIN_ASSERTIONS))

check = expect.check
check_async = expect.check_async
evaluate = expect.evaluate
evaluate_async = expect.evaluate_async
embed = expect.embed
embed_async = expect.embed_async
fail = expect.fail


def register(*assertions) -> Expect:
    """Return a facade over the builtin catalog extended with ``assertions``."""
    return expect.register(*assertions)


__all__ = [
    # Entry points
    "check",
    "check_async",
    "evaluate",
    "evaluate_async",
    "embed",
    "embed_async",
    "fail",
    "register",
    "expect",
    "Expect",
    "EmbeddedAssertion",
    # Authoring
    "Assertion",
    "Catalog",
    "ImplementationStyle",
    "Phrase",
    "Slot",
    "create_assertion",
    "create_async_assertion",
    "AssertionFailure",
    # Synthesis
    "synthesize",
    "SynthesisOptions",
    "SATISFY_OPTIONS",
    "EXHAUSTIVE_OPTIONS",
    "SHAPE_OPTIONS",
    "Validator",
    # Outcomes
    "Diagnostic",
    "ValidationOutcome",
    "outcomes_collector",
    # Errors
    "PhrasedError",
    "DispatchError",
    "UnknownAssertionError",
    "AmbiguousAssertionError",
    "DoubleNegationError",
    "DuplicateAssertionError",
    "InvalidAssertionError",
    "SynthesisError",
    "UnexpectedAsyncError",
    "AssertionImplementationError",
    "ValidationFailure",
    # Config
    "PhrasedSettings",
    "get_settings",
    "__version__",
]

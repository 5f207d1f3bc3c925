"""Error taxonomy for dispatch, registration and assertion failures."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .outcome import Diagnostic, ValidationOutcome


class PhrasedError(Exception):
    """Base class for errors raised by the library itself."""


class DispatchError(PhrasedError, TypeError):
    """The argument tuple could not be routed to exactly one assertion.

    Attributes
    ----------
    arguments : tuple
        The full ``(subject, *args)`` tuple that failed to dispatch.
    """

    def __init__(self, message: str, arguments: Sequence[Any] = ()) -> None:
        self.arguments = tuple(arguments)
        super().__init__(message)


class UnknownAssertionError(DispatchError):
    """No registered assertion accepts the argument tuple.

    Attributes
    ----------
    suggestion : str or None
        Nearest registered phrase, if any.
    near_misses : tuple[str, ...]
        Reasons recorded for assertions whose phrase matched but whose slots
        rejected an argument.
    """

    def __init__(
        self,
        message: str,
        arguments: Sequence[Any] = (),
        *,
        suggestion: str | None = None,
        near_misses: Sequence[str] = (),
    ) -> None:
        self.suggestion = suggestion
        self.near_misses = tuple(near_misses)
        super().__init__(message, arguments)


class AmbiguousAssertionError(DispatchError):
    """Several assertions match the argument tuple with equal specificity."""

    def __init__(self, message: str, arguments: Sequence[Any] = (), *, candidates: Sequence[str] = ()) -> None:
        self.candidates = tuple(candidates)
        super().__init__(message, arguments)


class DoubleNegationError(DispatchError):
    """The phrase carries the negation marker more than once."""


class DuplicateAssertionError(PhrasedError, ValueError):
    """Two assertions with the same id, or colliding phrases, were registered."""

    def __init__(self, message: str, ids: Sequence[str] = ()) -> None:
        self.ids = tuple(ids)
        super().__init__(message)


class InvalidAssertionError(PhrasedError, TypeError):
    """An assertion definition is malformed."""


class SynthesisError(PhrasedError, TypeError):
    """A template value cannot be turned into a validator."""


class UnexpectedAsyncError(PhrasedError):
    """An asynchronous result surfaced on the synchronous path."""


class AssertionImplementationError(PhrasedError):
    """An assertion implementation returned a value of an unsupported kind.

    Attributes
    ----------
    assertion_id : str
        Id of the offending assertion.
    result : Any
        The unsupported return value.
    """

    def __init__(self, message: str, *, assertion_id: str, result: Any) -> None:
        self.assertion_id = assertion_id
        self.result = result
        super().__init__(message)


class ValidationFailure(AssertionError):
    """AssertionError with an attached diagnostic.

    Implementations may raise this directly; it is treated exactly like a
    returned :class:`~phrased.outcome.AssertionFailure`.

    Parameters
    ----------
    message : str
        Human-readable failure description.
    actual : Any
        Observed value.
    expected : Any
        Value the assertion expected.
    assertion_id : str or None
        Id of the failing assertion, filled in by the executor when omitted.
    diagnostic : Diagnostic or None
        Complete diagnostic; takes precedence over the other arguments.
    """

    def __init__(
        self,
        message: str = "",
        *,
        actual: Any = None,
        expected: Any = None,
        assertion_id: str | None = None,
        diagnostic: Diagnostic | None = None,
    ) -> None:
        if diagnostic is None:
            from .outcome import Diagnostic

            diagnostic = Diagnostic(
                message=message or "Assertion failed",
                assertion_id=assertion_id,
                actual=actual,
                expected=expected,
            )
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @classmethod
    def from_outcome(cls, outcome: ValidationOutcome) -> ValidationFailure:
        if outcome.diagnostic is None:
            raise ValueError("cannot raise for a passing outcome")
        return cls(diagnostic=outcome.diagnostic)

    @property
    def assertion_id(self) -> str | None:
        return self.diagnostic.assertion_id

    @property
    def actual(self) -> Any:
        return self.diagnostic.actual

    @property
    def expected(self) -> Any:
        return self.diagnostic.expected

    @property
    def outcome(self) -> ValidationOutcome:
        from .outcome import ValidationOutcome

        return ValidationOutcome(passed=False, diagnostic=self.diagnostic, assertion_id=self.assertion_id)

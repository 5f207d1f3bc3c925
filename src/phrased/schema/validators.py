"""Composable validators.

Validators never raise for a value that does not conform; ``validate`` returns
a :class:`ValidationResult` carrying every issue found, each tagged with the
path at which it was found. Validators are immutable once built, with the
single exception of :class:`BackReference`, whose target is bound by the
synthesizer after the referenced node is complete.
"""

from __future__ import annotations

import inspect
import math
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..errors import UnexpectedAsyncError
from ..formatting import render


if TYPE_CHECKING:
    from ..embed import EmbeddedAssertion


Path = tuple[Any, ...]

_STRICT_SCALARS = (bool, int, float, str, bytes)
SEQUENCE_TYPES = (list, tuple)


def format_path(path: Path) -> str:
    text = ""
    for segment in path:
        if isinstance(segment, int) and not isinstance(segment, bool):
            text += f"[{segment}]"
        elif isinstance(segment, str) and segment.isidentifier():
            text += f".{segment}" if text else segment
        else:
            text += f"[{segment!r}]"
    return text


def type_name(value: Any) -> str:
    return type(value).__name__


def is_number(value: Any) -> bool:
    """True for int/float/Decimal-like numbers, excluding bool."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class Issue:
    """A single reason a value failed validation."""

    path: Path
    message: str

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"at {format_path(self.path)}: {self.message}"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of :meth:`Validator.validate`.

    Attributes
    ----------
    success : bool
        Whether the value conforms.
    data : Any
        The value, coerced by the validator when it conforms.
    issues : tuple[Issue, ...]
        Every issue found; empty on success.
    """

    success: bool
    data: Any = None
    issues: tuple[Issue, ...] = ()

    def __bool__(self) -> bool:
        return self.success

    @property
    def error(self) -> str | None:
        if self.success:
            return None
        return "\n".join(str(issue) for issue in self.issues)


@dataclass(slots=True)
class Scope:
    """Validation state: the current path and the active back-reference visits."""

    path: Path = ()
    active: set[tuple[int, int]] = field(default_factory=set)

    def at(self, key: Any) -> Scope:
        return Scope(self.path + (key,), self.active)

    def issue(self, message: str) -> Issue:
        return Issue(self.path, message)


class Validator(ABC):
    """Base class for validators.

    Subclasses implement :meth:`check` and, when they hold children that may
    be asynchronous, :meth:`check_async`.
    """

    description: str = "value"

    def validate(self, value: Any) -> ValidationResult:
        """Validate ``value`` synchronously.

        Raises
        ------
        UnexpectedAsyncError
            If the validator contains an asynchronous embedded assertion.
        """
        issues = self.check(value, Scope())
        if issues:
            return ValidationResult(False, value, tuple(issues))
        return ValidationResult(True, self.coerce(value))

    async def validate_async(self, value: Any) -> ValidationResult:
        """Validate ``value``, awaiting asynchronous embedded assertions."""
        issues = await self.check_async(value, Scope())
        if issues:
            return ValidationResult(False, value, tuple(issues))
        return ValidationResult(True, self.coerce(value))

    def coerce(self, value: Any) -> Any:
        return value

    @abstractmethod
    def check(self, value: Any, scope: Scope) -> list[Issue]:
        """Return the issues found for ``value`` at ``scope``."""

    async def check_async(self, value: Any, scope: Scope) -> list[Issue]:
        return self.check(value, scope)

    @property
    @abstractmethod
    def signature(self) -> str:
        """Structural key used to deduplicate sibling validators."""

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.description}>"


class AnyValidator(Validator):
    description = "anything"

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        return []

    @property
    def signature(self) -> str:
        return "any"


class NeverValidator(Validator):
    description = "nothing"

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        return [scope.issue(f"no value is allowed here, received {render(value)}")]

    @property
    def signature(self) -> str:
        return "never"


def same_value(candidate: Any, expected: Any) -> bool:
    """Literal equality: bools only equal bools, numbers compare numerically."""
    if isinstance(expected, bool) or isinstance(candidate, bool):
        return type(candidate) is bool and type(expected) is bool and candidate is expected
    if expected is None:
        return candidate is None
    if is_number(expected) and is_number(candidate):
        return candidate == expected
    if not (isinstance(candidate, type(expected)) or isinstance(expected, type(candidate))):
        return False
    return candidate == expected


class LiteralValidator(Validator):
    def __init__(self, expected: Any) -> None:
        self.expected = expected
        self.description = render(expected)

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        if same_value(value, self.expected):
            return []
        return [scope.issue(f"expected {self.description}, received {render(value)}")]

    @property
    def signature(self) -> str:
        return f"literal:{type(self.expected).__qualname__}:{self.expected!r}"


class EqualityValidator(Validator):
    """Plain ``==`` comparison, used for value types such as sets."""

    def __init__(self, expected: Any) -> None:
        self.expected = expected
        self.description = f"equal to {render(expected)}"

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        if value == self.expected:
            return []
        return [scope.issue(f"expected {render(self.expected)}, received {render(value)}")]

    @property
    def signature(self) -> str:
        return f"equal:{self.expected!r}"


@lru_cache(maxsize=None)
def _strict_adapter(py_type: type) -> TypeAdapter:
    return TypeAdapter(py_type)


class InstanceValidator(Validator):
    """Runtime type check.

    ``bool``, ``int``, ``float``, ``str`` and ``bytes`` are checked with a
    strict pydantic adapter, so ``True`` is not an ``int`` and ``"1"`` is not
    a number; every other class is checked with ``isinstance``.
    """

    def __init__(self, cls: type | tuple[type, ...], label: str | None = None) -> None:
        self.cls = cls
        if label is None:
            names = cls if isinstance(cls, tuple) else (cls,)
            label = " | ".join(item.__name__ for item in names)
        self.description = label

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        if self.cls in _STRICT_SCALARS:
            try:
                _strict_adapter(self.cls).validate_python(value, strict=True)
            except ValidationError as exc:
                reason = exc.errors()[0]["msg"]
                return [scope.issue(f"{reason}, received {render(value)}")]
            return []
        if isinstance(value, self.cls):
            return []
        return [scope.issue(f"expected {self.description}, received {type_name(value)}")]

    @property
    def signature(self) -> str:
        names = self.cls if isinstance(self.cls, tuple) else (self.cls,)
        return "type:" + ",".join(item.__qualname__ for item in names)


class NaNValidator(Validator):
    description = "NaN"

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        if isinstance(value, float) and math.isnan(value):
            return []
        if isinstance(value, Decimal) and value.is_nan():
            return []
        return [scope.issue(f"expected NaN, received {render(value)}")]

    @property
    def signature(self) -> str:
        return "nan"


class PatternValidator(Validator):
    """Match the string form of the value against a compiled pattern."""

    def __init__(self, pattern: re.Pattern) -> None:
        self.pattern = pattern
        self.description = f"matching {pattern.pattern!r}"

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        if isinstance(self.pattern.pattern, bytes):
            subject = value if isinstance(value, bytes) else str(value).encode()
        else:
            subject = value if isinstance(value, str) else str(value)
        if self.pattern.search(subject):
            return []
        return [scope.issue(f"expected a value {self.description}, received {render(value)}")]

    @property
    def signature(self) -> str:
        return f"pattern:{self.pattern.pattern!r}:{self.pattern.flags}"


class PatternLiteralValidator(Validator):
    """The value must itself be a pattern with the same source and flags."""

    def __init__(self, pattern: re.Pattern) -> None:
        self.pattern = pattern
        self.description = f"re.compile({pattern.pattern!r})"

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        if (
            isinstance(value, re.Pattern)
            and value.pattern == self.pattern.pattern
            and value.flags == self.pattern.flags
        ):
            return []
        return [scope.issue(f"expected {self.description}, received {render(value)}")]

    @property
    def signature(self) -> str:
        return f"pattern-literal:{self.pattern.pattern!r}:{self.pattern.flags}"


class PredicateValidator(Validator):
    """Validator backed by a plain predicate function."""

    def __init__(self, predicate: Callable[[Any], bool], description: str) -> None:
        self.predicate = predicate
        self.description = description

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        if self.predicate(value):
            return []
        return [scope.issue(f"expected {self.description}, received {render(value)}")]

    @property
    def signature(self) -> str:
        return f"predicate:{self.description}"


class ModelValidator(Validator):
    """Validate (and coerce) a value with a pydantic model."""

    def __init__(self, model: type[BaseModel], description: str | None = None) -> None:
        self.model = model
        self.description = description or model.__name__

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        if isinstance(value, self.model):
            return []
        if not isinstance(value, Mapping):
            return [scope.issue(f"expected {self.description}, received {type_name(value)}")]
        try:
            self.model.model_validate(dict(value))
        except ValidationError as exc:
            return [Issue(scope.path + tuple(error["loc"]), error["msg"]) for error in exc.errors()]
        return []

    def coerce(self, value: Any) -> Any:
        if isinstance(value, self.model):
            return value
        return self.model.model_validate(dict(value))

    @property
    def signature(self) -> str:
        return f"model:{self.model.__qualname__}"


class UnionValidator(Validator):
    """Accept a value that satisfies any one of the options."""

    def __init__(self, options: Iterable[Validator]) -> None:
        self.options = tuple(options)
        self.description = " | ".join(option.description for option in self.options)

    def _mismatch(self, value: Any, scope: Scope) -> list[Issue]:
        return [scope.issue(f"expected {self.description}, received {render(value)}")]

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        for option in self.options:
            if not option.check(value, scope):
                return []
        return self._mismatch(value, scope)

    async def check_async(self, value: Any, scope: Scope) -> list[Issue]:
        for option in self.options:
            if not await option.check_async(value, scope):
                return []
        return self._mismatch(value, scope)

    @property
    def signature(self) -> str:
        return "union(" + ",".join(option.signature for option in self.options) + ")"


class AllOfValidator(Validator):
    """Require every validator, reporting the first one that fails."""

    def __init__(self, validators: Iterable[Validator]) -> None:
        self.validators = tuple(validators)
        self.description = " & ".join(validator.description for validator in self.validators)

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        for validator in self.validators:
            issues = validator.check(value, scope)
            if issues:
                return issues
        return []

    async def check_async(self, value: Any, scope: Scope) -> list[Issue]:
        for validator in self.validators:
            issues = await validator.check_async(value, scope)
            if issues:
                return issues
        return []

    @property
    def signature(self) -> str:
        return "all(" + ",".join(validator.signature for validator in self.validators) + ")"


Pending = list[tuple[Validator, Any, Scope]]


class CompositeValidator(Validator):
    """Validator that checks its own shape, then delegates to children.

    Subclasses implement :meth:`plan`, returning the shape issues and the
    ``(child, value, scope)`` triples still to check.
    """

    children: tuple[Validator, ...] = ()

    @abstractmethod
    def plan(self, value: Any, scope: Scope) -> tuple[list[Issue], Pending]:
        """Split the check into shape issues and pending child checks."""

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        issues, pending = self.plan(value, scope)
        for child, item, child_scope in pending:
            issues.extend(child.check(item, child_scope))
        return issues

    async def check_async(self, value: Any, scope: Scope) -> list[Issue]:
        issues, pending = self.plan(value, scope)
        for child, item, child_scope in pending:
            issues.extend(await child.check_async(item, child_scope))
        return issues


def _sequence_label(types: tuple[type, ...]) -> str:
    return " or ".join(item.__name__ for item in types)


class SequenceValidator(CompositeValidator):
    """Positional validator for lists and tuples.

    Each template position must be present. Extra trailing elements are
    accepted unless ``exhaustive`` is set.
    """

    def __init__(
        self,
        items: Iterable[Validator],
        *,
        exhaustive: bool = False,
        sequence_types: tuple[type, ...] = SEQUENCE_TYPES,
    ) -> None:
        self.children = tuple(items)
        self.exhaustive = exhaustive
        self.sequence_types = sequence_types
        self.description = f"{_sequence_label(sequence_types)} of {len(self.children)} element(s)"

    def plan(self, value: Any, scope: Scope) -> tuple[list[Issue], Pending]:
        if not isinstance(value, self.sequence_types):
            return [scope.issue(f"expected {_sequence_label(self.sequence_types)}, received {type_name(value)}")], []
        issues: list[Issue] = []
        for index in range(len(value), len(self.children)):
            issues.append(scope.at(index).issue(f"missing element, expected {self.children[index].description}"))
        if self.exhaustive and len(value) > len(self.children):
            issues.append(
                scope.issue(f"expected exactly {len(self.children)} element(s), received {len(value)}")
            )
        pending = [(child, item, scope.at(index)) for index, (child, item) in enumerate(zip(self.children, value))]
        return issues, pending

    @property
    def signature(self) -> str:
        inner = ",".join(child.signature for child in self.children)
        return f"seq[{self.exhaustive}]({inner})"


class ArrayOfValidator(CompositeValidator):
    """Every element of a list or tuple must satisfy ``element``."""

    def __init__(self, element: Validator, *, sequence_types: tuple[type, ...] = SEQUENCE_TYPES) -> None:
        self.element = element
        self.children = (element,)
        self.sequence_types = sequence_types
        self.description = f"{_sequence_label(sequence_types)} of {element.description}"

    def plan(self, value: Any, scope: Scope) -> tuple[list[Issue], Pending]:
        if not isinstance(value, self.sequence_types):
            return [scope.issue(f"expected {_sequence_label(self.sequence_types)}, received {type_name(value)}")], []
        return [], [(self.element, item, scope.at(index)) for index, item in enumerate(value)]

    @property
    def signature(self) -> str:
        return f"array({self.element.signature})"


ITEM_MODES = ("some", "every", "first", "last")


def close_iterator(iterator: Any) -> None:
    close = getattr(iterator, "close", None)
    if close is not None:
        close()


class ItemsValidator(Validator):
    """Validate the items an iterable produces, one at a time.

    ``mode`` selects which items must satisfy ``element``:

    - ``"some"``: at least one item; iteration stops at the first match.
    - ``"every"``: all items; iteration stops at the first mismatch.
    - ``"first"`` / ``"last"``: the first or last item, which must exist.

    Generators abandoned before exhaustion are closed.
    """

    def __init__(
        self,
        element: Validator,
        mode: str = "every",
        *,
        accepts: type | tuple[type, ...] = Iterable,
        label: str = "iterable",
    ) -> None:
        if mode not in ITEM_MODES:
            raise ValueError(f"unknown item mode {mode!r}; expected one of {', '.join(ITEM_MODES)}")
        self.element = element
        self.mode = mode
        self.accepts = accepts
        self.label = label
        self.description = f"{label} with {mode} item {element.description}"

    def _selected(self, iterator: Any) -> Iterable[tuple[int, Any]]:
        if self.mode == "first":
            for pair in enumerate(iterator):
                yield pair
                return
        elif self.mode == "last":
            last = None
            for last in enumerate(iterator):
                pass
            if last is not None:
                yield last
        else:
            yield from enumerate(iterator)

    def _start(self, value: Any, scope: Scope) -> tuple[Any, list[Issue]]:
        if not isinstance(value, self.accepts):
            return None, [scope.issue(f"expected {self.label}, received {type_name(value)}")]
        return iter(value), []

    def _settle(self, issues: list[Issue]) -> list[Issue] | None:
        """Final issues once iteration stopped at this item, or None to keep going."""
        if self.mode == "some":
            return [] if not issues else None
        if issues:
            return issues
        return [] if self.mode in ("first", "last") else None

    def _exhausted(self, seen: bool, scope: Scope) -> list[Issue]:
        if self.mode == "some":
            return [scope.issue(f"no item matches {self.element.description}")]
        if self.mode == "every" or seen:
            return []
        return [scope.issue(f"expected at least one item, received an empty {self.label}")]

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        iterator, issues = self._start(value, scope)
        if iterator is None:
            return issues
        seen = False
        try:
            for index, item in self._selected(iterator):
                seen = True
                verdict = self._settle(self.element.check(item, scope.at(index)))
                if verdict is not None:
                    return verdict
        finally:
            close_iterator(iterator)
        return self._exhausted(seen, scope)

    async def check_async(self, value: Any, scope: Scope) -> list[Issue]:
        iterator, issues = self._start(value, scope)
        if iterator is None:
            return issues
        seen = False
        try:
            for index, item in self._selected(iterator):
                seen = True
                verdict = self._settle(await self.element.check_async(item, scope.at(index)))
                if verdict is not None:
                    return verdict
        finally:
            close_iterator(iterator)
        return self._exhausted(seen, scope)

    @property
    def signature(self) -> str:
        return f"items[{self.mode}]({self.element.signature})"


class CollectedValidator(Validator):
    """Drain an iterable into a list, then validate the list with ``inner``."""

    def __init__(self, inner: Validator) -> None:
        self.inner = inner
        self.description = f"items forming {inner.description}"

    def _collect(self, value: Any, scope: Scope) -> tuple[list[Any] | None, list[Issue]]:
        if not isinstance(value, Iterable):
            return None, [scope.issue(f"expected an iterable, received {type_name(value)}")]
        return list(value), []

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        items, issues = self._collect(value, scope)
        return issues if items is None else self.inner.check(items, scope)

    async def check_async(self, value: Any, scope: Scope) -> list[Issue]:
        items, issues = self._collect(value, scope)
        return issues if items is None else await self.inner.check_async(items, scope)

    @property
    def signature(self) -> str:
        return f"collected({self.inner.signature})"


def is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (bool, int, float, complex, Decimal, str, bytes))


def lookup(value: Any, key: Any, *, attributes: bool) -> tuple[bool, Any]:
    """Find ``key`` in a mapping, or as an attribute when ``attributes`` is set."""
    if isinstance(value, Mapping):
        if key in value:
            return True, value[key]
        return False, None
    if attributes and isinstance(key, str) and hasattr(value, key):
        return True, getattr(value, key)
    return False, None


class MappingValidator(CompositeValidator):
    """Key-by-key validator for mappings.

    Open (non-exhaustive) validators ignore extra keys and also accept
    non-mapping objects whose attributes satisfy the fields.
    """

    def __init__(self, fields: Mapping[Any, Validator], *, exhaustive: bool = False) -> None:
        self.fields = dict(fields)
        self.children = tuple(self.fields.values())
        self.exhaustive = exhaustive
        keys = ", ".join(repr(key) for key in self.fields)
        self.description = f"mapping with keys {keys}" if keys else "mapping"

    def plan(self, value: Any, scope: Scope) -> tuple[list[Issue], Pending]:
        if not isinstance(value, Mapping) and (self.exhaustive or is_scalar(value)):
            return [scope.issue(f"expected a mapping, received {type_name(value)}")], []
        issues: list[Issue] = []
        pending: Pending = []
        for key, child in self.fields.items():
            found, item = lookup(value, key, attributes=not self.exhaustive)
            if not found:
                issues.append(scope.at(key).issue("missing key"))
            else:
                pending.append((child, item, scope.at(key)))
        if self.exhaustive:
            extra = [key for key in value if key not in self.fields]
            if extra:
                issues.append(scope.issue(f"unexpected key(s): {', '.join(repr(key) for key in extra)}"))
        return issues, pending

    @property
    def signature(self) -> str:
        inner = ",".join(f"{key!r}:{child.signature}" for key, child in self.fields.items())
        return f"map[{self.exhaustive}]({inner})"


class EmptyMappingValidator(Validator):
    description = "empty mapping"

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        if isinstance(value, Mapping) and not value:
            return []
        return [scope.issue(f"expected an empty mapping, received {render(value)}")]

    @property
    def signature(self) -> str:
        return "empty-map"


def public_attributes(value: Any) -> dict[str, Any]:
    return {key: item for key, item in vars(value).items() if not key.startswith("_")}


class AttributesValidator(CompositeValidator):
    """Attribute-by-attribute validator for plain objects.

    Exhaustive validators also require the candidate's class to match and
    reject public attributes the template does not have.
    """

    def __init__(self, cls: type, fields: Mapping[str, Validator], *, exhaustive: bool = False) -> None:
        self.cls = cls
        self.fields = dict(fields)
        self.children = tuple(self.fields.values())
        self.exhaustive = exhaustive
        self.description = f"{cls.__name__} with attributes {', '.join(self.fields)}"

    def plan(self, value: Any, scope: Scope) -> tuple[list[Issue], Pending]:
        if self.exhaustive and not isinstance(value, self.cls):
            return [scope.issue(f"expected {self.cls.__name__}, received {type_name(value)}")], []
        if is_scalar(value):
            return [scope.issue(f"expected an object, received {render(value)}")], []
        issues: list[Issue] = []
        pending: Pending = []
        for name, child in self.fields.items():
            found, item = lookup(value, name, attributes=True)
            if not found:
                issues.append(scope.at(name).issue("missing attribute"))
            else:
                pending.append((child, item, scope.at(name)))
        if self.exhaustive and hasattr(value, "__dict__"):
            extra = [name for name in public_attributes(value) if name not in self.fields]
            if extra:
                issues.append(scope.issue(f"unexpected attribute(s): {', '.join(extra)}"))
        return issues, pending

    @property
    def signature(self) -> str:
        inner = ",".join(f"{name}:{child.signature}" for name, child in self.fields.items())
        return f"attrs[{self.cls.__qualname__},{self.exhaustive}]({inner})"


class BackReference(Validator):
    """Stand-in for a validator that is still being built (a cycle).

    Re-entering the same reference with the same candidate object accepts,
    so cyclic values validate against the cyclic template they came from.
    """

    description = "<recursive>"

    def __init__(self) -> None:
        self.target: Validator | None = None

    def bind(self, target: Validator) -> None:
        self.target = target

    def _enter(self, value: Any, scope: Scope) -> tuple[int, int] | None:
        if self.target is None:
            raise RuntimeError("back reference used before it was bound")
        key = (id(self), id(value))
        if key in scope.active:
            return None
        scope.active.add(key)
        return key

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        key = self._enter(value, scope)
        if key is None:
            return []
        try:
            return self.target.check(value, scope)
        finally:
            scope.active.discard(key)

    async def check_async(self, value: Any, scope: Scope) -> list[Issue]:
        key = self._enter(value, scope)
        if key is None:
            return []
        try:
            return await self.target.check_async(value, scope)
        finally:
            scope.active.discard(key)

    @property
    def signature(self) -> str:
        return "ref"


class EmbeddedValidator(Validator):
    """Run an embedded assertion against the value at this position."""

    def __init__(self, embedded: EmbeddedAssertion) -> None:
        self.embedded = embedded
        self.description = str(embedded)

    @staticmethod
    def _issues(outcome: Any, scope: Scope) -> list[Issue]:
        if outcome.passed:
            return []
        return [scope.issue(outcome.diagnostic.message)]

    def check(self, value: Any, scope: Scope) -> list[Issue]:
        if self.embedded.is_async:
            raise UnexpectedAsyncError(
                f"{self.embedded} is asynchronous and can only be used with check_async()"
            )
        return self._issues(self.embedded.evaluate(value), scope)

    async def check_async(self, value: Any, scope: Scope) -> list[Issue]:
        return self._issues(await self.embedded.evaluate_async(value), scope)

    @property
    def signature(self) -> str:
        return f"embed:{id(self.embedded)}"


CALLABLE = PredicateValidator(callable, "a callable")
AWAITABLE = PredicateValidator(inspect.isawaitable, "an awaitable")
ANY = AnyValidator()

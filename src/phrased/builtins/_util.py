"""Helpers shared by the builtin assertions."""

from __future__ import annotations

import difflib
import inspect
import re
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any

from rich.pretty import pretty_repr

from ..config import get_settings
from ..errors import UnexpectedAsyncError
from ..formatting import render
from ..outcome import AssertionFailure
from ..schema import EXHAUSTIVE_OPTIONS, SATISFY_OPTIONS, SHAPE_OPTIONS, SynthesisOptions, Validator, synthesize
from ..schema.validators import ValidationResult, is_scalar

_KEYPATH_SEGMENT = re.compile(r"""\.?([^.\[\]'"]+)|\[(-?\d+)\]|\[(['"])(.*?)\3\]""")


def _configured(options: SynthesisOptions) -> SynthesisOptions:
    return replace(options, max_depth=get_settings().max_depth)


def satisfy_validator(template: Any) -> Validator:
    return synthesize(template, _configured(SATISFY_OPTIONS))


def exhaustive_validator(template: Any) -> Validator:
    return synthesize(template, _configured(EXHAUSTIVE_OPTIONS))


def shape_validator(template: Any) -> Validator:
    return synthesize(template, _configured(SHAPE_OPTIONS))


def describe_issues(prefix: str, result: ValidationResult) -> AssertionFailure | None:
    """Turn a failed validation into a failure, or ``None`` when it passed."""
    if result.success:
        return None
    lines = "\n".join(f"  - {issue}" for issue in result.issues)
    return AssertionFailure(message=f"{prefix}:\n{lines}", actual=result.data)


def parse_keypath(keypath: str) -> list[str | int]:
    """Split ``a.b[0]["c d"]`` into ``["a", "b", 0, "c d"]``.

    Raises
    ------
    ValueError
        If the keypath is malformed.
    """
    segments: list[str | int] = []
    position = 0
    while position < len(keypath):
        match = _KEYPATH_SEGMENT.match(keypath, position)
        if match is None or match.end() == position:
            raise ValueError(f"Invalid keypath {keypath!r}")
        if match.group(1) is not None:
            segments.append(match.group(1))
        elif match.group(2) is not None:
            segments.append(int(match.group(2)))
        else:
            segments.append(match.group(4))
        position = match.end()
    return segments


def _step(value: Any, segment: str | int) -> tuple[bool, Any]:
    if isinstance(value, Mapping):
        if segment in value:
            return True, value[segment]
        return False, None
    if isinstance(segment, int) and isinstance(value, (list, tuple, str)):
        if -len(value) <= segment < len(value):
            return True, value[segment]
        return False, None
    if isinstance(segment, str) and not is_scalar(value) and hasattr(value, segment):
        return True, getattr(value, segment)
    return False, None


def resolve_keypath(value: Any, key: Any) -> tuple[bool, Any]:
    """Look up ``key`` directly, then as a keypath when it is a string."""
    found, item = _step(value, key)
    if found or not isinstance(key, str):
        return found, item
    try:
        segments = parse_keypath(key)
    except ValueError:
        return False, None
    for segment in segments:
        found, value = _step(value, segment)
        if not found:
            return False, None
    return True, value


def trap(fn: Callable[[], Any]) -> Exception | None:
    """Call ``fn`` and return the exception it raises, if any."""
    try:
        result = fn()
    except Exception as exc:
        return exc
    if inspect.isawaitable(result):
        close = getattr(result, "close", None)
        if close is not None:
            close()
        raise UnexpectedAsyncError(f"{render(fn)} returned an awaitable; use check_async()")
    return None


def match_error(error: BaseException, template: Any) -> AssertionFailure | None:
    """Compare an exception with an exception class, message, pattern or template."""
    if inspect.isclass(template) and issubclass(template, BaseException):
        if isinstance(error, template):
            return None
        return AssertionFailure(
            message=f"Expected error to be a {template.__name__}, but got {type(error).__name__}: {error}",
            actual=type(error).__name__,
            expected=template.__name__,
        )
    if isinstance(template, str):
        if str(error) == template:
            return None
        return AssertionFailure(
            message=f"Expected error message {template!r}, but got {str(error)!r}",
            actual=str(error),
            expected=template,
        )
    if isinstance(template, re.Pattern):
        if template.search(str(error)):
            return None
        return AssertionFailure(
            message=f"Expected error message to match {template.pattern!r}, but got {str(error)!r}",
            actual=str(error),
            expected=template.pattern,
        )
    return describe_issues(f"Expected error {error!r} to satisfy {render(template)}", satisfy_validator(template).validate(error))


def diff(actual: Any, expected: Any) -> str:
    """Unified diff of the pretty representations of two values."""
    lines = difflib.unified_diff(
        pretty_repr(expected).splitlines(),
        pretty_repr(actual).splitlines(),
        fromfile="expected",
        tofile="actual",
        lineterm="",
    )
    return "\n".join(lines)

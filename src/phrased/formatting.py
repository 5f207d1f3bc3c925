"""Value rendering for diagnostics."""

from typing import Any

from rich.pretty import pretty_repr

from .config import get_settings


def render(value: Any) -> str:
    """Render a value for a diagnostic message, truncated per settings."""
    settings = get_settings()
    return pretty_repr(
        value,
        max_width=100,
        max_depth=settings.render_max_depth,
        max_length=settings.render_max_length,
        max_string=settings.render_max_string,
    )


def render_args(values: tuple[Any, ...]) -> str:
    return ", ".join(render(value) for value in values)

"""Display toggles and rich console capture."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from rich.console import RenderableType

DEFAULT_WIDTH = 100


@dataclass(frozen=True)
class DisplayStyle:
    """Emoji and color toggles threaded through every renderer."""

    emoji: bool = True
    color: bool = True


def render_text(
    renderable: RenderableType,
    style: DisplayStyle,
    *,
    width: int | None = None,
) -> str:
    """Render a rich renderable to a string.

    ANSI styling is emitted only when ``style.color`` is set.

    Parameters
    ----------
    renderable
        Rich renderable (table, text, group).
    style
        Active display style.
    width
        Console width; long text lines are not wrapped.

    Returns
    -------
    str
        Rendered text without a trailing newline.
    """
    buffer = StringIO()
    console = Console(
        file=buffer,
        force_terminal=style.color,
        color_system="standard" if style.color else None,
        no_color=not style.color,
        width=width or DEFAULT_WIDTH,
        emoji=False,
        highlight=False,
        markup=False,
        legacy_windows=False,
    )
    console.print(renderable, soft_wrap=width is None)
    return buffer.getvalue().rstrip("\n")


__all__ = ["DEFAULT_WIDTH", "DisplayStyle", "render_text"]

"""Colored text tokens and ANSI escape handling.

A prompt is built as a `TokenSeq` of `Token`s. Each token carries its own
color and is closed with a reset escape, so tokens can be concatenated in any
order without colors bleeding into each other.
"""

import re
from dataclasses import dataclass
from enum import Enum

# SGR sequences of the form ESC[m, ESC[N m or ESC[N;M m
ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[([0-9]{1,2}(;[0-9]{1,2})?)?m")


class Color(Enum):
    """Escape sequences available to prompt themes."""

    NONE = ""
    GREEN = "\x1b[0;32m"
    LIME = "\x1b[1;32m"
    YELLOW = "\x1b[1;33m"
    RED = "\x1b[1;31m"
    RESET = "\x1b[m"

    @classmethod
    def from_name(cls, name: str) -> "Color":
        """Look up a color by its lowercase theme name.

        Raises:
            ValueError: If the name is unknown or names the reset sequence.
        """
        key = name.strip().upper()
        if key == "RESET" or key not in cls.__members__:
            raise ValueError(f"unknown color '{name}'")
        return cls[key]


@dataclass(frozen=True)
class Token:
    """A run of text rendered in a single color."""

    text: str
    color: Color = Color.NONE

    def render(self) -> str:
        # Empty tokens vanish entirely, escapes included
        if not self.text:
            return ""
        if self.color is Color.NONE:
            return self.text
        return f"{self.color.value}{self.text}{Color.RESET.value}"

    def plain(self) -> str:
        return self.text


@dataclass(frozen=True)
class TokenSeq:
    """An ordered group of tokens (or nested groups)."""

    items: tuple["Token | TokenSeq", ...]

    def render(self) -> str:
        return "".join(item.render() for item in self.items)

    def plain(self) -> str:
        return "".join(item.plain() for item in self.items)

    def join(self, separator: str) -> str:
        """Render non-empty items separated by `separator`."""
        rendered = [item.render() for item in self.items]
        return separator.join(part for part in rendered if part)


def strip_ansi(text: str) -> str:
    """Remove color escape sequences, leaving only visible characters."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def visible_width(text: str) -> int:
    """Number of visible characters in `text` once escapes are removed.

    Shells need this to compute prompt width when escapes are not wrapped in
    non-printing markers.
    """
    return len(strip_ansi(text))

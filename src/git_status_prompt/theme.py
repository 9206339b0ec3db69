"""Marker characters and colors used when composing the prompt.

The theme is immutable and handed to the formatter explicitly. Users may
override individual markers and colors from a TOML file:

    [markers]
    stashed = "S"

    [colors]
    untracked = "yellow"
    base = "none"
"""

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from types import MappingProxyType

from git_status_prompt.ansi import Color

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GIT_STATUS_PROMPT_CONFIG"
CONFIG_RELATIVE_PATH = Path("git-status-prompt") / "config.toml"


class StyleKind(Enum):
    """Every styled element of the prompt."""

    CLEAN = "clean"
    DIRTY = "dirty"
    TRACKED = "tracked"
    UNTRACKED = "untracked"
    STAGED = "staged"
    STASHED = "stashed"
    BEHIND = "behind"
    AHEAD = "ahead"
    EVEN = "even"
    ANOMALY = "anomaly"


@dataclass(frozen=True)
class MarkerStyle:
    """Marker character (may be empty) and the color it is drawn in."""

    marker: str
    color: Color


DEFAULT_STYLES: Mapping[StyleKind, MarkerStyle] = MappingProxyType(
    {
        StyleKind.CLEAN: MarkerStyle("", Color.GREEN),
        StyleKind.DIRTY: MarkerStyle("*", Color.YELLOW),
        StyleKind.TRACKED: MarkerStyle("!", Color.YELLOW),
        StyleKind.UNTRACKED: MarkerStyle("?", Color.RED),
        StyleKind.STAGED: MarkerStyle("+", Color.GREEN),
        StyleKind.STASHED: MarkerStyle("$", Color.LIME),
        StyleKind.BEHIND: MarkerStyle("<", Color.RED),
        StyleKind.AHEAD: MarkerStyle(">", Color.YELLOW),
        StyleKind.EVEN: MarkerStyle("", Color.GREEN),
        StyleKind.ANOMALY: MarkerStyle("", Color.RED),
    }
)


# Kinds whose marker character appears in the output; the rest only set a color
MARKER_KINDS = frozenset(
    {
        StyleKind.TRACKED,
        StyleKind.UNTRACKED,
        StyleKind.STAGED,
        StyleKind.STASHED,
        StyleKind.BEHIND,
        StyleKind.AHEAD,
    }
)


class ThemeConfigError(Exception):
    """Raised when a theme configuration file cannot be applied."""


@dataclass(frozen=True)
class Theme:
    """Immutable mapping of style kinds to markers and colors."""

    styles: Mapping[StyleKind, MarkerStyle] = field(default_factory=lambda: DEFAULT_STYLES)
    base_color: Color = Color.GREEN

    def marker(self, kind: StyleKind) -> str:
        return self.styles[kind].marker

    def color(self, kind: StyleKind) -> Color:
        return self.styles[kind].color

    def with_overrides(
        self,
        *,
        markers: Mapping[StyleKind, str],
        colors: Mapping[StyleKind, Color],
        base_color: Color | None = None,
    ) -> "Theme":
        """Return a copy with the given markers and colors replaced."""
        styles = dict(self.styles)
        for kind, marker in markers.items():
            styles[kind] = replace(styles[kind], marker=marker)
        for kind, color in colors.items():
            styles[kind] = replace(styles[kind], color=color)
        return Theme(
            styles=MappingProxyType(styles),
            base_color=base_color if base_color is not None else self.base_color,
        )


def default_theme() -> Theme:
    return Theme()


def _parse_kind(key: str, section: str) -> StyleKind:
    try:
        return StyleKind(key)
    except ValueError:
        raise ThemeConfigError(f"[{section}] has unknown entry '{key}'") from None


def theme_from_dict(data: Mapping[str, object]) -> Theme:
    """Build a theme from parsed TOML data, starting from the defaults.

    Args:
        data: Parsed TOML document with optional [markers] and [colors] tables

    Returns:
        Theme with the overrides applied

    Raises:
        ThemeConfigError: If a table, key, marker, or color name is invalid
    """
    markers_table = data.get("markers", {})
    colors_table = data.get("colors", {})
    if not isinstance(markers_table, dict) or not isinstance(colors_table, dict):
        raise ThemeConfigError("[markers] and [colors] must be tables")

    markers: dict[StyleKind, str] = {}
    for key, value in markers_table.items():
        kind = _parse_kind(key, "markers")
        if kind not in MARKER_KINDS:
            raise ThemeConfigError(f"[markers] entry '{key}' has no marker, only a color")
        if not isinstance(value, str):
            raise ThemeConfigError(f"marker '{key}' must be a string")
        markers[kind] = value

    colors: dict[StyleKind, Color] = {}
    base_color: Color | None = None
    for key, value in colors_table.items():
        if not isinstance(value, str):
            raise ThemeConfigError(f"color '{key}' must be a string")
        try:
            color = Color.from_name(value)
        except ValueError as e:
            raise ThemeConfigError(f"color '{key}': {e}") from e
        if key == "base":
            base_color = color
            continue
        colors[_parse_kind(key, "colors")] = color

    return default_theme().with_overrides(markers=markers, colors=colors, base_color=base_color)


def load_theme(config_path: Path | None) -> Theme:
    """Load a theme from `config_path` if given and present; otherwise defaults."""
    if config_path is None or not config_path.exists():
        return default_theme()

    logger.debug("Loading theme from %s", config_path)
    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ThemeConfigError(f"cannot read {config_path}: {e}") from e

    return theme_from_dict(data)


def resolve_config_path(
    explicit: Path | None, env: Mapping[str, str], home: Path
) -> Path | None:
    """Pick the config file: explicit option, then env var, then XDG location."""
    if explicit is not None:
        return explicit

    from_env = env.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)

    xdg_home = env.get("XDG_CONFIG_HOME")
    config_home = Path(xdg_home) if xdg_home else home / ".config"
    return config_home / CONFIG_RELATIVE_PATH

"""Reading and writing the tray applet's configuration file."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

Color = Tuple[int, int, int]

DEFAULT_CONFIG_NAME = ".flit.conf"
DEFAULT_SOUND_CONTROL = "autosel"


class Location(Enum):
    """Screen corner (or a custom spot) where the tray is placed."""

    SE = "se"
    SW = "sw"
    NW = "nw"
    NE = "ne"
    CUSTOM = "custom"


class Style(IntEnum):
    """Colour style of the tray."""

    NORMAL = 0
    INVERSE = 1
    TRANSPARENT = 2
    CUSTOM = 3


@dataclass
class FlitConfig:
    """Settings kept between sessions."""

    show_clock: bool = True
    show_sound: bool = True
    show_battery: bool = True
    show24hr: bool = False
    menu_hotkey_activation: bool = True
    style: Style = Style.NORMAL
    zoom: float = 1.0
    sound_control_name: str = DEFAULT_SOUND_CONTROL
    saved_volume: Optional[int] = None
    location: Location = Location.SE
    x: int = 10
    y: int = 10
    custom_fg: Color = (0x00, 0x00, 0x1F)
    custom_bg: Color = (0x58, 0x7D, 0xAA)

    def render(self, volume: int) -> str:
        """Return the configuration file text, recording ``volume`` as the level."""
        if self.location is Location.CUSTOM:
            location = f"{self.x},{self.y}"
        else:
            location = self.location.value
        lines = [
            "# Configuration file for Flit ",
            "",
            "# Note: this is a machine-generated file; if you change any",
            "#       content, preserve spelling, capitalization, and spacing!",
            "",
            "# Enable (1) or disable (0) individual applets",
            f"show_clock = {int(self.show_clock)}",
            f"show_sound = {int(self.show_sound)}",
            f"show_battery = {int(self.show_battery)}",
            "",
            "# Show clock in 24 hour format (1 means yes, 0 means no - use AM/PM)",
            f"show24hr = {int(self.show24hr)}",
            "",
            "# OSS/ALSA sound control name to use, autosel means 'try to pick for me'",
            f"sound_control_name = {self.sound_control_name}",
            "",
            "# OSS/ALSA sound volume level (0 to 100)",
            f"sound_volume_level = {int(volume)}",
            "",
            "# Automatically pop up right-click menu when Ctrl key is first pressed"
            " (1 = do, 0 = don't)",
            f"menu_hotkey_activation = {int(self.menu_hotkey_activation)}",
            "",
            "# Color style: 0 is normal, 1 is inverted, 2 is 'transparent'"
            " (based on root window color), 3 is custom style",
            f"style = {int(self.style)}",
            "",
            "# Zoom size: 1.0 is normal, 1.50 is 150%, etc.",
            f"zoom = {self.zoom:.2f}",
            "",
            "# Location: se (Southeast, i.e. lower right), sw, nw, ne,"
            " or a custom X,Y like this example:",
            f"#location = {self.x},{self.y}",
            f"location = {location}",
            "",
            "# Custom foreground and background color color (r,g,b) 0-255:",
            "custom_fg = {},{},{}".format(*self.custom_fg),
            "custom_bg = {},{},{}".format(*self.custom_bg),
            "",
        ]
        return "\n".join(lines) + "\n"


_INT = r"([+-]?\d+)"
_FLOAT = r"([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
_WORD = r"(\S+)"
_PAIR = re.compile(r"([+-]?\d+),([+-]?\d+)")
_TRIPLE = re.compile(r"([+-]?\d+),([+-]?\d+),([+-]?\d+)")


def _key(name: str, value: str) -> "re.Pattern[str]":
    return re.compile(rf"{re.escape(name)}\s*=\s*{value}")


def _set_style(config: FlitConfig, raw: str) -> None:
    try:
        config.style = Style(int(raw))
    except ValueError:
        pass


def _set_sound_name(config: FlitConfig, raw: str) -> None:
    if 0 < len(raw) < 63:
        config.sound_control_name = raw


def _set_volume(config: FlitConfig, raw: str) -> None:
    level = int(raw)
    if 0 <= level <= 100:
        config.saved_volume = level


def _set_location(config: FlitConfig, raw: str) -> None:
    corners = {loc.value: loc for loc in Location if loc is not Location.CUSTOM}
    if raw in corners:
        config.location = corners[raw]
        return
    match = _PAIR.match(raw)
    if match:
        config.x, config.y = int(match.group(1)), int(match.group(2))
        config.location = Location.CUSTOM


def _color(raw: str) -> Optional[Color]:
    match = _TRIPLE.match(raw)
    if not match:
        return None
    r, g, b = (int(part) & 0xFF for part in match.groups())
    return (r, g, b)


def _set_fg(config: FlitConfig, raw: str) -> None:
    color = _color(raw)
    if color is not None:
        config.custom_fg = color


def _set_bg(config: FlitConfig, raw: str) -> None:
    color = _color(raw)
    if color is not None:
        config.custom_bg = color


def _flag(attribute: str) -> Callable[[FlitConfig, str], None]:
    def setter(config: FlitConfig, raw: str) -> None:
        setattr(config, attribute, bool(int(raw)))

    return setter


def _set_zoom(config: FlitConfig, raw: str) -> None:
    config.zoom = float(raw)


_RULES = [
    (_key("show_clock", _INT), _flag("show_clock")),
    (_key("show_sound", _INT), _flag("show_sound")),
    (_key("show_battery", _INT), _flag("show_battery")),
    (_key("menu_hotkey_activation", _INT), _flag("menu_hotkey_activation")),
    (_key("style", _INT), _set_style),
    (_key("zoom", _FLOAT), _set_zoom),
    (_key("sound_control_name", _WORD), _set_sound_name),
    (_key("sound_volume_level", _INT), _set_volume),
    (_key("show24hr", _INT), _flag("show24hr")),
    (_key("location", _WORD), _set_location),
    (_key("custom_fg", _WORD), _set_fg),
    (_key("custom_bg", _WORD), _set_bg),
]


def parse_config(text: str) -> FlitConfig:
    """Build a configuration from file text; unknown or malformed lines are ignored."""
    config = FlitConfig()
    for line in text.splitlines():
        for pattern, apply in _RULES:
            match = pattern.match(line)
            if match:
                apply(config, match.group(1))
                break
    return config


def load_config(path: Union[str, os.PathLike]) -> FlitConfig:
    """Read the configuration at ``path``; defaults are used when it cannot be read."""
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return FlitConfig()
    return parse_config(text)


def save_config(config: FlitConfig, path: Union[str, os.PathLike], volume: int) -> None:
    """Write ``config`` to ``path`` with ``volume`` as the saved sound level."""
    Path(path).write_text(config.render(volume), encoding="utf-8")


def default_config_path(option: Optional[str] = None) -> str:
    """Return ``option`` if given, otherwise the file in the user's home directory."""
    if option:
        return option
    home = os.environ.get("HOME", "")
    return f"{home}/{DEFAULT_CONFIG_NAME}"
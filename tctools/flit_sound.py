"""Sound level control for the tray applet through the ALSA mixer command."""

from __future__ import annotations

import math
import re
import subprocess
from typing import Callable, List, Optional, Sequence, Tuple

AUTOSELECT = "autosel"
VOLUME_STEP = 3
INITIAL_LEVEL = 91

Runner = Callable[[Sequence[str]], str]

_LIMITS_RE = re.compile(r"Limits:\s*(?:Playback\s*)?([+-]?\d+)\s*-\s*([+-]?\d+)")
_CONTROL_RE = re.compile(r"Simple mixer control '([^']+)")
_MONO_RE = re.compile(r"Mono: Playback\s*([+-]?\d+)")
_LEFT_RE = re.compile(r"Front Left:\s*(?:Playback\s*)?([+-]?\d+)")
_RIGHT_RE = re.compile(r"Front Right:\s*(?:Playback\s*)?([+-]?\d+)")


def _run(args: Sequence[str]) -> str:
    return subprocess.run(
        list(args), capture_output=True, text=True, check=False
    ).stdout


def _round(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _find(pattern: "re.Pattern[str]", marker: str, line: str) -> Optional[re.Match]:
    start = line.find(marker)
    if start < 0:
        return None
    return pattern.match(line, start)


def _scan(text: str, autosel: bool) -> Tuple[Optional[Tuple[int, int]], Optional[str]]:
    """Walk mixer output for the first limits and, if asked, a control with a volume."""
    limits: Optional[Tuple[int, int]] = None
    chosen: Optional[str] = None
    need_autosel = autosel
    candidate = ""
    for line in text.splitlines():
        if limits is None:
            match = _find(_LIMITS_RE, "Limits:", line)
            if match:
                limits = (int(match.group(1)), int(match.group(2)))
                continue
        if need_autosel:
            match = _find(_CONTROL_RE, "Simple mixer control", line)
            if match:
                candidate = match.group(1)
                continue
        if need_autosel and "volume" in line and candidate:
            chosen = candidate
            need_autosel = False
            continue
        candidate = ""
    return limits, chosen


def parse_limits(text: str) -> Optional[Tuple[int, int]]:
    """Return the first (minimum, maximum) volume range in mixer output, if any."""
    return _scan(text, autosel=False)[0]


def choose_control(text: str) -> Optional[str]:
    """Pick the first mixer control whose next line mentions a volume."""
    return _scan(text, autosel=True)[1]


def _channels(text: str, mono: bool, first: bool) -> Tuple[int, int]:
    left = right = -1
    for line in text.splitlines():
        if mono:
            match = _find(_MONO_RE, "Mono: Playback", line)
            if match:
                left = right = int(match.group(1))
                continue
        match = _find(_LEFT_RE, "Front Left:", line)
        if match:
            left = int(match.group(1))
            if not first:
                continue
        match = _find(_RIGHT_RE, "Front Right:", line)
        if match:
            right = int(match.group(1))
        if first and left >= 0 and right >= 0:
            break
    return left, right


def parse_channels(text: str) -> Tuple[int, int]:
    """Return the (left, right) raw levels in mixer output; -1 marks a missing channel.

    A mono control sets both channels.
    """
    return _channels(text, mono=True, first=False)


def level_to_raw(percent: int, minimum: int, maximum: int) -> int:
    """Raw mixer value for a percentage of the range width."""
    return _round(percent * ((maximum - minimum) / 100.0))


def raw_to_percent(left: int, right: int, minimum: int, maximum: int) -> int:
    """Average of two raw channel levels as a percentage of the range."""
    if maximum <= minimum:
        raise ValueError("mixer range is empty")
    return _round((left + right) * (100.0 / ((maximum - minimum) * 2.0)))


def adjust_volume(current: int, previous: int, direction: int) -> Tuple[int, int]:
    """Step the volume down (<0), up (>0) or toggle mute (0).

    Returns the new level and the level to remember for unmuting.
    """
    if direction < 0:
        return max(current - VOLUME_STEP, 0), current
    if direction > 0:
        return min(current + VOLUME_STEP, 100), current
    if current > 0:
        return 0, current
    return previous, previous


class AlsaMixer:
    """A playback volume control driven through the amixer command."""

    def __init__(self, control_name: str = AUTOSELECT, runner: Optional[Runner] = None):
        self.control_name = control_name
        self.runner: Runner = runner if runner is not None else _run
        self.minimum = 0
        self.maximum = 100
        self.level = INITIAL_LEVEL

    def _call(self, args: List[str]) -> Optional[str]:
        try:
            return self.runner(args)
        except OSError:
            return None

    def probe(self) -> bool:
        """Find the volume range (and a control when auto-selecting); True if usable."""
        autosel = self.control_name == AUTOSELECT
        args = ["amixer"] if autosel else ["amixer", "sget", self.control_name]
        text = self._call(args)
        if text is None:
            return False
        limits, chosen = _scan(text, autosel)
        if chosen is not None:
            self.control_name = chosen
        if limits is None:
            return False
        self.minimum, self.maximum = limits
        return True

    def read_level(self) -> Optional[int]:
        """Read the current level in percent; None if it could not be determined."""
        text = self._call(["amixer", "sget", self.control_name])
        if text is None:
            return None
        left, right = _channels(text, mono=False, first=True)
        if left < 0 or right < 0 or self.maximum <= self.minimum:
            return None
        self.level = raw_to_percent(left, right, self.minimum, self.maximum)
        return self.level

    def set_level(self, percent: int) -> Optional[int]:
        """Set the level in percent and return the level the mixer reports back."""
        raw = level_to_raw(percent, self.minimum, self.maximum)
        text = self._call(["amixer", "sset", self.control_name, str(raw)])
        if text is None:
            return None
        left, right = parse_channels(text)
        if left < 0 or right < 0 or self.maximum <= self.minimum:
            return None
        self.level = raw_to_percent(left, right, self.minimum, self.maximum)
        return self.level
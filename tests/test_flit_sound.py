import pytest

from tctools.flit_sound import (
    AlsaMixer,
    adjust_volume,
    choose_control,
    level_to_raw,
    parse_channels,
    parse_limits,
    raw_to_percent,
)

MASTER = """Simple mixer control 'Master',0
  Capabilities: pvolume pswitch pswitch-joined
  Playback channels: Front Left - Front Right
  Limits: Playback 0 - 31
  Mono:
  Front Left: Playback 25 [81%] [-4.50dB] [on]
  Front Right: Playback 25 [81%] [-4.50dB] [on]
"""

ALL_CONTROLS = """Simple mixer control 'IEC958',0
  Capabilities: pswitch pswitch-joined
  Playback channels: Mono
  Mono: Playback [on]
""" + MASTER

MONO = """Simple mixer control 'Speaker',0
  Capabilities: pvolume pvolume-joined
  Limits: Playback 0 - 40
  Mono: Playback 12 [30%] [on]
"""


class FakeRunner:
    def __init__(self, output):
        self.output = output
        self.calls = []

    def __call__(self, args):
        self.calls.append(list(args))
        return self.output


def failing_runner(args):
    raise FileNotFoundError("amixer")


def test_parse_limits_with_playback():
    assert parse_limits(MASTER) == (0, 31)


def test_parse_limits_without_playback():
    assert parse_limits("  Limits: 5 - 63\n") == (5, 63)


def test_parse_limits_missing():
    assert parse_limits("Simple mixer control 'X',0\n") is None


def test_choose_control_skips_controls_without_volume():
    assert choose_control(ALL_CONTROLS) == "Master"


def test_choose_control_none_when_no_volume():
    assert choose_control("Simple mixer control 'IEC958',0\n  Capabilities: pswitch\n") is None


def test_parse_channels_stereo():
    assert parse_channels(MASTER) == (25, 25)


def test_parse_channels_mono_sets_both():
    assert parse_channels(MONO) == (12, 12)


def test_parse_channels_missing():
    assert parse_channels("nothing here\n") == (-1, -1)


@pytest.mark.parametrize("percent", range(0, 101, 7))
def test_level_round_trip_on_full_range(percent):
    raw = level_to_raw(percent, 0, 100)
    assert raw == percent
    assert raw_to_percent(raw, raw, 0, 100) == percent


def test_level_to_raw_rounds_half_away_from_zero():
    assert level_to_raw(50, 0, 31) == 16


def test_raw_to_percent_full_scale():
    assert raw_to_percent(31, 31, 0, 31) == 100


def test_raw_to_percent_empty_range():
    with pytest.raises(ValueError):
        raw_to_percent(1, 1, 5, 5)


def test_adjust_volume_down_clamps():
    assert adjust_volume(2, 50, -1) == (0, 2)


def test_adjust_volume_up_clamps():
    assert adjust_volume(99, 10, 1) == (100, 99)


def test_adjust_volume_up_and_down_cancel():
    up, _ = adjust_volume(40, 0, 1)
    down, prev = adjust_volume(up, 0, -1)
    assert down == 40
    assert prev == up


def test_adjust_volume_toggle_mutes_and_restores():
    muted, remembered = adjust_volume(65, 10, 0)
    assert (muted, remembered) == (0, 65)
    assert adjust_volume(muted, remembered, 0) == (65, 65)


def test_probe_autoselects_control_and_limits():
    runner = FakeRunner(ALL_CONTROLS)
    mixer = AlsaMixer(runner=runner)
    assert mixer.probe() is True
    assert mixer.control_name == "Master"
    assert (mixer.minimum, mixer.maximum) == (0, 31)
    assert runner.calls == [["amixer"]]


def test_probe_named_control_uses_sget():
    runner = FakeRunner(MASTER)
    mixer = AlsaMixer("Master", runner)
    assert mixer.probe() is True
    assert runner.calls == [["amixer", "sget", "Master"]]


def test_probe_without_limits_fails():
    mixer = AlsaMixer("Master", FakeRunner("Simple mixer control 'Master',0\n"))
    assert mixer.probe() is False


def test_probe_without_amixer_fails():
    assert AlsaMixer(runner=failing_runner).probe() is False


def test_read_level():
    runner = FakeRunner(MASTER)
    mixer = AlsaMixer("Master", runner)
    mixer.probe()
    level = mixer.read_level()
    assert level == raw_to_percent(25, 25, 0, 31)
    assert mixer.level == level
    assert runner.calls[-1] == ["amixer", "sget", "Master"]


def test_read_level_ignores_mono_control():
    mixer = AlsaMixer("Speaker", FakeRunner(MONO))
    mixer.probe()
    assert mixer.read_level() is None


def test_set_level_sends_raw_value_and_reads_back():
    runner = FakeRunner(MASTER)
    mixer = AlsaMixer("Master", runner)
    mixer.probe()
    result = mixer.set_level(60)
    assert runner.calls[-1] == ["amixer", "sset", "Master", str(level_to_raw(60, 0, 31))]
    assert result == raw_to_percent(25, 25, 0, 31)
    assert mixer.level == result


def test_set_level_mono_control():
    mixer = AlsaMixer("Speaker", FakeRunner(MONO))
    mixer.probe()
    assert mixer.set_level(30) == raw_to_percent(12, 12, 0, 40)


def test_set_level_without_amixer_returns_none():
    mixer = AlsaMixer("Master", failing_runner)
    assert mixer.set_level(50) is None
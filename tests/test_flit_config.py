import pytest

from tctools.flit_config import (
    FlitConfig,
    Location,
    Style,
    default_config_path,
    load_config,
    parse_config,
    save_config,
)


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "absent.conf")
    assert config == FlitConfig()
    assert config.sound_control_name == "autosel"
    assert config.location is Location.SE
    assert config.custom_fg == (0x00, 0x00, 0x1F)
    assert config.custom_bg == (0x58, 0x7D, 0xAA)


def test_parse_flags_and_style():
    text = "show_clock = 0\nshow_sound=0\nshow_battery = 1\nshow24hr = 1\nstyle = 2\n"
    config = parse_config(text)
    assert config.show_clock is False
    assert config.show_sound is False
    assert config.show_battery is True
    assert config.show24hr is True
    assert config.style is Style.TRANSPARENT


def test_unknown_style_is_ignored():
    assert parse_config("style = 9\n").style is Style.NORMAL


def test_parse_zoom_and_sound_name():
    config = parse_config("zoom = 1.50\nsound_control_name = Master\n")
    assert config.zoom == pytest.approx(1.5)
    assert config.sound_control_name == "Master"


def test_long_sound_name_is_ignored():
    config = parse_config("sound_control_name = " + "x" * 70 + "\n")
    assert config.sound_control_name == "autosel"


@pytest.mark.parametrize("value, expected", [("0", 0), ("100", 100), ("55", 55)])
def test_volume_in_range(value, expected):
    assert parse_config(f"sound_volume_level = {value}\n").saved_volume == expected


@pytest.mark.parametrize("value", ["-1", "101"])
def test_volume_out_of_range_ignored(value):
    assert parse_config(f"sound_volume_level = {value}\n").saved_volume is None


@pytest.mark.parametrize(
    "tag, location",
    [("se", Location.SE), ("sw", Location.SW), ("nw", Location.NW), ("ne", Location.NE)],
)
def test_corner_locations(tag, location):
    assert parse_config(f"location = {tag}\n").location is location


def test_custom_location():
    config = parse_config("location = 120,45\n")
    assert config.location is Location.CUSTOM
    assert (config.x, config.y) == (120, 45)


def test_bad_location_keeps_default():
    config = parse_config("location = middle\n")
    assert config.location is Location.SE


def test_custom_colors():
    config = parse_config("custom_fg = 1,2,3\ncustom_bg = 10,20,30\n")
    assert config.custom_fg == (1, 2, 3)
    assert config.custom_bg == (10, 20, 30)


def test_color_values_are_bytes():
    config = parse_config("custom_fg = 256,255,0\n")
    assert all(0 <= c <= 255 for c in config.custom_fg)
    assert config.custom_fg[1:] == (255, 0)


def test_comment_lines_ignored():
    config = parse_config("#location = 5,5\n# show_clock = 0\n")
    assert config == FlitConfig()


def test_render_pins_format():
    text = FlitConfig(location=Location.NW).render(42)
    assert "sound_volume_level = 42\n" in text
    assert "location = nw\n" in text
    assert "zoom = 1.00\n" in text
    assert text.startswith("# Configuration file for Flit \n")


def test_round_trip(tmp_path):
    original = FlitConfig(
        show_clock=False,
        show24hr=True,
        menu_hotkey_activation=False,
        style=Style.CUSTOM,
        zoom=1.25,
        sound_control_name="PCM",
        location=Location.CUSTOM,
        x=300,
        y=7,
        custom_fg=(9, 8, 7),
        custom_bg=(200, 100, 50),
    )
    path = tmp_path / "flit.conf"
    save_config(original, path, 60)
    loaded = load_config(path)
    assert loaded.saved_volume == 60
    loaded.saved_volume = None
    assert loaded == original


def test_default_config_path_uses_option():
    assert default_config_path("/tmp/other.conf") == "/tmp/other.conf"


def test_default_config_path_uses_home(monkeypatch):
    monkeypatch.setenv("HOME", "/home/someone")
    assert default_config_path(None) == "/home/someone/.flit.conf"
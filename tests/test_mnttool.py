import pytest

from tctools.mnttool import (
    DEFAULT_POSITION,
    Mountable,
    is_mounted,
    parse_mountables,
    parse_position,
    toggle_mount,
)


class Recorder:
    def __init__(self, *codes):
        self.codes = list(codes)
        self.commands = []

    def __call__(self, command):
        self.commands.append(command)
        return self.codes.pop(0) if self.codes else 0


def test_parse_mountables_splits_device_and_label():
    result = parse_mountables("sda1~USB Stick\nsdb2~Data\n")
    assert [m.device for m in result] == ["sda1", "sdb2"]
    assert [m.label for m in result] == ["USB Stick", "Data"]
    assert not any(m.mounted for m in result)


def test_parse_mountables_without_separator():
    (only,) = parse_mountables("sdc1\n")
    assert only.device == "sdc1"
    assert only.label == "sdc1"


def test_parse_mountables_empty():
    assert parse_mountables("") == []


def test_is_mounted_matches_mount_point():
    mtab = "/dev/sda1 /mnt/sda1 vfat rw 0 0\n"
    assert is_mounted("sda1", mtab) is True


def test_is_mounted_needs_whole_name():
    mtab = "/dev/sda1 /mnt/sda1 vfat rw 0 0\n"
    assert is_mounted("sda", mtab) is False


def test_parse_position_two_numbers():
    assert parse_position("120 300") == (120, 300)


def test_parse_position_empty_uses_zero_then_default():
    assert parse_position("") == (0, DEFAULT_POSITION[1])


def test_parse_position_one_number():
    assert parse_position("50") == (50, 0)


def test_parse_position_garbage():
    assert parse_position("abc 10") == (0, DEFAULT_POSITION[1])


def test_toggle_unmounts_mounted_device():
    device = Mountable("sda1", "USB", mounted=True)
    runner = Recorder(0)
    assert toggle_mount(device, runner) is False
    assert device.mounted is False
    assert runner.commands == ["sudo umount /dev/sda1"]


def test_toggle_failed_unmount_keeps_state():
    device = Mountable("sda1", "USB", mounted=True)
    assert toggle_mount(device, Recorder(256)) is False
    assert device.mounted is True


def test_toggle_mounts_without_file_manager():
    device = Mountable("sdb2", "Data")
    runner = Recorder(0)
    assert toggle_mount(device, runner) is False
    assert device.mounted is True
    assert runner.commands == ["sudo mount /dev/sdb2"]


def test_toggle_mount_opens_file_manager():
    device = Mountable("sdb2", "Data")
    runner = Recorder(0, 0)
    assert toggle_mount(device, runner, "filer") is True
    assert runner.commands[1] == "filer /mnt/sdb2&"


def test_toggle_failed_mount_skips_file_manager():
    device = Mountable("sdb2", "Data")
    runner = Recorder(1)
    assert toggle_mount(device, runner, "filer") is False
    assert device.mounted is False
    assert len(runner.commands) == 1


@pytest.mark.parametrize("mounted", [True, False])
def test_two_successful_toggles_restore_state(mounted):
    device = Mountable("sdc1", "Disk", mounted=mounted)
    toggle_mount(device, Recorder(0))
    toggle_mount(device, Recorder(0))
    assert device.mounted is mounted
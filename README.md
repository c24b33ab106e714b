# tctools

A set of small desktop utilities for a lightweight Linux system. Each command
opens a single window built with Tkinter from the standard library. Most of
them call ordinary system tools such as `mount`, `ifconfig`, `udhcpc`, `xset`,
`xmodmap` or `filetool.sh` to do their work.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

The package has no dependencies outside the standard library. The windows
need a Python built with Tkinter and a running X display.

## Commands

| Command     | What it does |
|-------------|--------------|
| `filetool`  | Runs a dry run, backup, safe backup or restore through `sudo /usr/bin/filetool.sh` on the device you enter, shows its output, and edits `/opt/.filetool.lst` and `/opt/.xfiletool.lst`. The device is read from `/etc/sysconfig/backup_device` at start. The "None" action empties that file after asking. |
| `flrun`     | An application launcher. As you type, it offers the programs on `PATH` whose names contain what you typed, ignoring case. It can run the command with `sudo`. |
| `mnttool`   | One button per device that `mountables.sh` lists. Green means mounted and red means not mounted. A click mounts or unmounts the device. If `FILEMGR` is set, a new mount is opened in that file manager and the tool closes. `MNTTOOL="X Y"` sets the window position. The tool checks `/etc/fstab` every two seconds and rebuilds the buttons when the file changes. |
| `mousetool` | Sets pointer speed (1 to 10) and left- or right-handed buttons. It saves the two commands as an executable `.mouse_config` in the current directory. |
| `network`   | Sets up an interface by DHCP or with a static address, broadcast, gateway and name servers. It can save the setup as `/opt/<interface>.sh` and add that script to `/opt/bootlocal.sh` and `/opt/.filetool.lst`. |
| `popup`     | Shows its arguments as a message box. |
| `popask`    | Asks its arguments as a yes/no question and prints `1` or `0`. |
| `flpdf`     | Opens a file chooser and views the chosen PDF with `mupdf`. |
| `loadpack`  | Opens a file chooser under `/mnt` and loads the chosen starter pack with `sudo loadpack.sh`. |

## Library use

The parsing and command-building helpers work without any window:

```python
from tctools.filetool import BackupAction, filetool_command
from tctools.flit_config import parse_config
from tctools.flit_sound import AlsaMixer, parse_limits, raw_to_percent
from tctools.mnttool import parse_mountables
from tctools.network import guess_gateway

print(filetool_command(BackupAction.BACKUP, "sdb1"))
# sudo /usr/bin/filetool.sh -bv sdb1

print(guess_gateway("192.168.1.10"))       # 192.168.1.254
print(parse_limits("  Limits: Playback 0 - 64"))  # (0, 64)
print(raw_to_percent(64, 64, 0, 64))       # 100

for device in parse_mountables("sdb1~USB stick\nsr0~CD"):
    print(device.device, device.label)
```

### Tray configuration and volume helpers

`tctools.flit_config` reads and writes a tray configuration file
(`~/.flit.conf` by default, see `default_config_path`). The file has one
`key = value` setting per line:

```
show_clock = 1
show_sound = 1
show_battery = 1
show24hr = 0
sound_control_name = autosel
sound_volume_level = 75
menu_hotkey_activation = 1
style = 0
zoom = 1.00
location = se
custom_fg = 0,0,31
custom_bg = 88,125,170
```

`style` is 0 for normal, 1 for inverse, 2 for transparent and 3 for custom.
`location` is one of `se`, `sw`, `nw`, `ne`, or a pair `X,Y` for a custom
position. `parse_config` and `load_config` ignore lines they do not
recognise. `FlitConfig.render` and `save_config` write the file back.

`tctools.flit_sound.AlsaMixer` drives a playback volume through `amixer`.
`probe` finds the volume range and, for `autosel`, picks a control.
`read_level` and `set_level` work in percent. `adjust_volume` steps the level
by 3% or toggles mute.

## What is not included

There is no tray window. The clock, volume and battery applet has only its
configuration and volume helpers, described above. There is no battery
monitor. There is also no download tool with a progress bar, and no tool that
times mirrors to choose the fastest one.
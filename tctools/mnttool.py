"""A column of buttons that mount and unmount the available drives."""

from __future__ import annotations

import contextlib
import os
import re
import subprocess
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional, Tuple

MOUNTABLES_SCRIPT = "mountables.sh"
MOUNTABLES_FILE = "/tmp/mountables"
MTAB = "/etc/mtab"
FSTAB = "/etc/fstab"
DEFAULT_POSITION = (80, 60)
BUTTON_W = 80
BUTTON_H = 25
MOUNTED_COLOR = "green"
UNMOUNTED_COLOR = "red"
WATCH_MS = 2000

Runner = Callable[[str], int]

_INT_RE = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Mountable:
    """A device that can be mounted under /mnt."""

    device: str
    label: str
    mounted: bool = False


def parse_mountables(text: str) -> List[Mountable]:
    """Devices from "device~label" lines; a line without '~' is both."""
    mountables = []
    for line in text.splitlines():
        device, sep, label = line.partition("~")
        mountables.append(Mountable(device, label if sep else line))
    return mountables


def is_mounted(device: str, mtab_text: str) -> bool:
    """Whether the mount table shows ``device`` mounted at /mnt/<device>."""
    marker = f"/mnt/{device} "
    return any(marker in line for line in mtab_text.splitlines())


def parse_position(value: str) -> Tuple[int, int]:
    """Window position from "X Y"; an unreadable number reads as 0 and stops reading."""
    position = []
    pos = 0
    for default_index in range(2):
        match = _INT_RE.match(value, pos)
        if match is None:
            position.append(0)
            position.extend(DEFAULT_POSITION[default_index + 1 :])
            break
        position.append(int(match.group(1)))
        pos = match.end()
    return position[0], position[1]


def _shell(command: str) -> int:
    return subprocess.run(command, shell=True, check=False).returncode


def toggle_mount(
    mountable: Mountable, runner: Optional[Runner] = None, filemgr: str = ""
) -> bool:
    """Mount or unmount a device, updating its state on success.

    Returns True when a file manager was opened on the newly mounted device.
    """
    run = _shell if runner is None else runner
    if mountable.mounted:
        if run(f"sudo umount /dev/{mountable.device}") == 0:
            mountable.mounted = False
        return False
    if run(f"sudo mount /dev/{mountable.device}") == 0:
        mountable.mounted = True
        if filemgr:
            run(f"{filemgr} /mnt/{mountable.device}&")
            return True
    return False


def _read(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


def _load_mountables(runner: Runner) -> List[Mountable]:
    runner(MOUNTABLES_SCRIPT)
    mountables = parse_mountables(_read(MOUNTABLES_FILE))
    with contextlib.suppress(OSError):
        os.unlink(MOUNTABLES_FILE)
    mtab = _read(MTAB)
    for mountable in mountables:
        mountable.mounted = is_mounted(mountable.device, mtab)
    return mountables


def _mtime(path: str) -> Optional[float]:
    try:
        return os.stat(path).st_mtime
    except OSError:
        return None


class MntToolWindow:
    """The mount buttons, a refresh button and a watch on the filesystem table."""

    def __init__(self, root, filemgr: str = "", position: Tuple[int, int] = DEFAULT_POSITION):
        import tkinter as tk

        self.root = root
        self.filemgr = filemgr
        self.position = position
        self.runner: Runner = _shell
        self.mountables: List[Mountable] = []
        self.buttons = []
        root.title("mnttool")
        self.frame = tk.Frame(root)
        self.frame.pack(fill=tk.BOTH, expand=True)
        self._tip = None
        self.refresh()
        self._fstab_mtime = _mtime(FSTAB)
        root.after(WATCH_MS, self._watch)

    def _remember_position(self) -> None:
        self.position = (self.root.winfo_x(), self.root.winfo_y())

    def refresh(self) -> None:
        """Rebuild the buttons from the current list of mountable devices."""
        import tkinter as tk

        mountables = _load_mountables(self.runner)
        if not mountables:
            self.root.destroy()
            raise SystemExit(1)
        self.mountables = mountables
        for child in self.frame.winfo_children():
            child.destroy()
        self.buttons = []
        for index, mountable in enumerate(mountables):
            button = tk.Button(
                self.frame,
                text=mountable.device,
                bg=MOUNTED_COLOR if mountable.mounted else UNMOUNTED_COLOR,
                activebackground=MOUNTED_COLOR if mountable.mounted else UNMOUNTED_COLOR,
                command=partial(self._toggle, index),
            )
            button.pack(fill=tk.X)
            button.bind("<Enter>", partial(self._show_tip, mountable.label))
            button.bind("<Leave>", self._hide_tip)
            self.buttons.append(button)
        tk.Button(self.frame, text="Refresh", command=self._rebuild).pack(fill=tk.X)
        x, y = self.position
        height = BUTTON_H * (len(mountables) + 1)
        self.root.geometry(f"{BUTTON_W}x{height}+{x}+{y}")

    def _toggle(self, index: int) -> None:
        self._remember_position()
        mountable = self.mountables[index]
        if toggle_mount(mountable, self.runner, self.filemgr):
            self.root.destroy()
            return
        color = MOUNTED_COLOR if mountable.mounted else UNMOUNTED_COLOR
        self.buttons[index].configure(bg=color, activebackground=color)

    def _rebuild(self) -> None:
        self._remember_position()
        self.runner("sudo rebuildfstab")
        self.refresh()

    def _watch(self) -> None:
        current = _mtime(FSTAB)
        if current != self._fstab_mtime:
            self._fstab_mtime = current
            self._remember_position()
            self.refresh()
        self.root.after(WATCH_MS, self._watch)

    def _show_tip(self, text: str, event) -> None:
        import tkinter as tk

        self._hide_tip()
        if not text:
            return
        tip = tk.Toplevel(self.root)
        tip.overrideredirect(True)
        tk.Label(tip, text=text, bg="#ffffe0", relief="solid", bd=1).pack()
        tip.geometry(f"+{event.x_root + 10}+{event.y_root + 10}")
        self._tip = tip

    def _hide_tip(self, _event=None) -> None:
        if self._tip is not None:
            self._tip.destroy()
            self._tip = None


def main(argv: Optional[List[str]] = None) -> int:
    """Open the mount tool."""
    import tkinter as tk

    filemgr = os.environ.get("FILEMGR", "")
    spec = os.environ.get("MNTTOOL")
    position = parse_position(spec) if spec is not None else DEFAULT_POSITION
    root = tk.Tk()
    MntToolWindow(root, filemgr, position)
    root.mainloop()
    return 0
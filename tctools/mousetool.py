"""Mouse speed and handedness settings."""

from __future__ import annotations

import os
import stat
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Tuple, Union

CONFIG_NAME = ".mouse_config"
DEFAULT_SPEED = 3
_MOUSE_TYPE_COMMAND = "xmodmap -pp|head -1|cut -f3 -d' '"


def pointer_order(right_handed: bool, mouse_type: str) -> str:
    """Button mapping for xmodmap; a type of "3" means a three-button mouse."""
    if right_handed:
        return "1 2 3" if mouse_type == "3" else "1 2 3 4 5"
    return "3 2 1" if mouse_type == "3" else "3 2 1 4 5"


def speed_command(speed: int) -> str:
    """Shell command that sets the pointer acceleration."""
    return f"xset m {int(speed)}/1 0"


def handedness_command(order: str) -> str:
    """Shell command that sets the pointer button mapping."""
    return f"xmodmap -e 'pointer = {order}'"


def write_mouse_config(
    path: Union[str, os.PathLike], speed: int, right_handed: bool, mouse_type: str
) -> Tuple[str, str]:
    """Write an executable script holding both commands and return them.

    Raises OSError if the file cannot be written.
    """
    commands = (
        speed_command(speed),
        handedness_command(pointer_order(right_handed, mouse_type)),
    )
    target = Path(path)
    target.write_text("".join(f"{command}\n" for command in commands), encoding="utf-8")
    mode = target.stat().st_mode
    target.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return commands


def _detect_mouse_type() -> Optional[str]:
    try:
        result = subprocess.run(
            _MOUSE_TYPE_COMMAND, shell=True, capture_output=True, text=True, check=False
        )
    except OSError:
        return None
    if not result.stdout:
        return None
    return result.stdout[0]


def main(argv: Optional[List[str]] = None) -> int:
    """Open the mouse settings window."""
    mouse_type = _detect_mouse_type()
    if mouse_type is None:
        print("popen results returned NULL", file=sys.stderr)
        return 1

    import tkinter as tk

    root = tk.Tk()
    root.title("MouseTool")
    speed = tk.IntVar(master=root, value=DEFAULT_SPEED)
    right_handed = tk.BooleanVar(master=root, value=True)

    tk.Scale(
        root,
        label="Mouse Speed",
        from_=1,
        to=10,
        resolution=1,
        orient=tk.HORIZONTAL,
        variable=speed,
    ).pack(padx=10, pady=5)
    tk.Radiobutton(root, text="Right Button", variable=right_handed, value=True).pack(
        anchor="w", padx=10
    )
    tk.Radiobutton(root, text="Left Button", variable=right_handed, value=False).pack(
        anchor="w", padx=10
    )

    def apply() -> None:
        try:
            commands = write_mouse_config(
                CONFIG_NAME, speed.get(), right_handed.get(), mouse_type
            )
        except OSError:
            print(f"Can't open {CONFIG_NAME} for output.", file=sys.stderr)
            root.destroy()
            raise SystemExit(1)
        for command in commands:
            subprocess.run(command, shell=True, check=False)

    buttons = tk.Frame(root)
    buttons.pack(pady=10)
    tk.Button(buttons, text="Apply", underline=0, command=apply).pack(side=tk.LEFT, padx=3)
    tk.Button(buttons, text="Exit", underline=0, command=root.destroy).pack(
        side=tk.LEFT, padx=3
    )
    root.mainloop()
    return 0
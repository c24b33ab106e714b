"""Application launcher with completion from the programs on the search path."""

from __future__ import annotations

import os
import subprocess
import sys
from typing import List, Optional


def find_matches(pattern: str, path: Optional[str] = None) -> List[str]:
    """Names of files and links on ``path`` whose names contain ``pattern``, any case.

    ``path`` defaults to the PATH environment variable; with neither, nothing matches.
    """
    if path is None:
        path = os.environ.get("PATH")
    if path is None:
        return []
    wanted = pattern.lower()
    found = []
    for directory in path.split(":"):
        try:
            entries = list(os.scandir(directory))
        except OSError:
            continue
        for entry in entries:
            try:
                usable = entry.is_symlink() or entry.is_file(follow_symlinks=False)
            except OSError:
                continue
            if usable and wanted in entry.name.lower():
                found.append(entry.name)
    return found


def sort_matches(names: List[str]) -> List[str]:
    """Matches in the order the launcher lists them."""
    return sorted(names)


def build_command(command: str, sudo: bool) -> str:
    """Shell command that runs ``command`` in the background, quietly."""
    prefix = "sudo " if sudo else ""
    return f"{prefix}{command} 2>/dev/null &"


def main(argv: Optional[List[str]] = None) -> int:
    """Open the launcher window."""
    import tkinter as tk
    from tkinter import filedialog, ttk

    root = tk.Tk()
    root.title("FLRun")
    tk.Label(root, text="Application launcher").pack(padx=25, pady=(10, 0))
    command = ttk.Combobox(root, width=30)
    command.pack(padx=25)
    sudo = tk.BooleanVar(master=root, value=False)
    tk.Checkbutton(root, text="Run with sudo", variable=sudo).pack(anchor="w", padx=25)

    def search(event=None) -> None:
        if event is not None and event.keysym in ("Return", "Escape", "Up", "Down"):
            return
        matches = sort_matches(find_matches(command.get()))
        command["values"] = matches
        if len(matches) == 1:
            command.set(matches[0])

    def run(_event=None) -> None:
        subprocess.run(build_command(command.get(), sudo.get()), shell=True, check=False)
        root.destroy()

    def browse() -> None:
        chosen = filedialog.askopenfilename(
            parent=root, initialdir=".", title="Select Application to Run"
        )
        if chosen:
            command.set(chosen)

    command.bind("<KeyRelease>", search)
    root.bind("<Return>", run)
    root.bind("<Alt-c>", lambda _event: root.destroy())

    buttons = tk.Frame(root)
    buttons.pack(pady=10)
    tk.Button(buttons, text="OK", width=6, default=tk.ACTIVE, command=run).pack(
        side=tk.LEFT, padx=4
    )
    tk.Button(buttons, text="Cancel", underline=0, width=6, command=root.destroy).pack(
        side=tk.LEFT, padx=4
    )
    tk.Button(buttons, text="Browse", width=6, command=browse).pack(side=tk.LEFT, padx=4)
    command.focus_set()
    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Backup, restore and maintenance of the backup include and exclude lists."""

from __future__ import annotations

import os
import subprocess
import sys
from enum import IntEnum
from pathlib import Path
from typing import Iterator, List, Optional, Union

FILETOOL_LIST = "/opt/.filetool.lst"
XFILETOOL_LIST = "/opt/.xfiletool.lst"
BACKUP_DEVICE_FILE = "/etc/sysconfig/backup_device"
FILETOOL_SCRIPT = "sudo /usr/bin/filetool.sh"

PathLike = Union[str, os.PathLike]


class BackupAction(IntEnum):
    """Actions offered by the action chooser, in menu order."""

    NONE = 0
    DRY_RUN = 1
    BACKUP = 2
    SAFE = 3
    RESTORE = 4

    @property
    def label(self) -> str:
        """Text shown in the chooser."""
        return self.name.replace("_", " ").title()


_FLAGS = {
    BackupAction.DRY_RUN: "-d",
    BackupAction.BACKUP: "-bv",
    BackupAction.SAFE: "-bsv",
    BackupAction.RESTORE: "-rv",
}


def action_flag(action) -> Optional[str]:
    """Script option for an action; None for NONE, a backup for unknown values."""
    try:
        action = BackupAction(action)
    except ValueError:
        return "-bv"
    return _FLAGS.get(action)


def filetool_command(action, device: str) -> str:
    """Shell command that performs ``action`` on ``device``."""
    if not device:
        raise ValueError("no backup device given")
    flag = action_flag(action)
    if flag is None:
        raise ValueError("the NONE action runs no command")
    return f"{FILETOOL_SCRIPT} {flag} {device}"


def read_list(path: PathLike) -> List[str]:
    """Lines of a list file; an unreadable file gives an empty list."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError:
        return []


def append_entry(path: PathLike, entry: str) -> None:
    """Add ``entry`` as a new line at the end of a list file."""
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(f"{entry}\n")


def delete_line(path: PathLike, line_number: int) -> None:
    """Remove the line with the given 1-based number; beyond the end nothing changes."""
    if line_number < 1:
        raise ValueError("line numbers start at 1")
    target = Path(path)
    lines = target.read_text(encoding="utf-8", errors="replace").splitlines(keepends=True)
    if line_number <= len(lines):
        del lines[line_number - 1]
    target.write_text("".join(lines), encoding="utf-8")


def protect_plus(item: str) -> str:
    """Escape '+' for use in a pattern; an item that starts with '+' is left as is."""
    if item.startswith("+"):
        return item
    return item.replace("+", "\\+")


def read_backup_device(path: PathLike = BACKUP_DEVICE_FILE) -> str:
    """First line of the backup device file, or "" if there is none."""
    lines = read_list(path)
    return lines[0] if lines else ""


def clear_backup_device(path: PathLike = BACKUP_DEVICE_FILE) -> None:
    """Empty the backup device file so that no backup takes place."""
    Path(path).write_text("", encoding="utf-8")


def _command_lines(command: str) -> Iterator[str]:
    try:
        proc = subprocess.Popen(
            command, shell=True, stdout=subprocess.PIPE, text=True, errors="replace"
        )
    except OSError:
        return
    with proc:
        for line in proc.stdout:
            yield line.rstrip("\n")


class FiletoolWindow:
    """The backup window with its results, include and exclude tabs."""

    def __init__(self, root):
        import tkinter as tk
        from tkinter import ttk

        self.root = root
        self.target = FILETOOL_LIST
        self.line_number = 0
        self.item = ""
        root.title("Backup Restore and Lists Maintenance")

        top = tk.Frame(root)
        top.pack(fill=tk.X, padx=5, pady=5)
        tk.Label(top, text="Device:").pack(side=tk.LEFT)
        self.device = tk.StringVar(master=root)
        tk.Entry(top, textvariable=self.device, width=45).pack(side=tk.LEFT, padx=3)
        self.device.trace_add("write", lambda *_args: self._device_changed())
        tk.Label(top, text="Action:").pack(side=tk.LEFT)
        self.action = ttk.Combobox(
            top, values=[action.label for action in BackupAction], width=10
        )
        self.action.current(0)
        self.action.configure(state="disabled")
        self.action.pack(side=tk.LEFT, padx=3)
        self.go = tk.Button(top, text="Go", state=tk.DISABLED, command=self._go)
        self.go.pack(side=tk.LEFT)

        self.tabs = ttk.Notebook(root)
        self.tabs.pack(fill=tk.BOTH, expand=True, padx=5)
        self.results = self._make_list("Action Results")
        self.files = self._make_list("Included for Backup (.filetool.lst)")
        self.xfiles = self._make_list("Excluded from Backup (.xfiletool.lst)")
        self.tabs.bind("<<NotebookTabChanged>>", lambda _event: self._tab_changed())
        self.files.bind(
            "<<ListboxSelect>>", lambda _event: self._selected(self.files, self.xfiles)
        )
        self.xfiles.bind(
            "<<ListboxSelect>>", lambda _event: self._selected(self.xfiles, self.files)
        )

        bottom = tk.Frame(root)
        bottom.pack(fill=tk.X, padx=5, pady=5)
        self.delete_btn = tk.Button(
            bottom, text="Delete Item", state=tk.DISABLED, command=self._delete
        )
        self.delete_btn.pack(side=tk.LEFT)
        self.clear_btn = tk.Button(
            bottom, text="Clear Item", state=tk.DISABLED, command=self._clear
        )
        self.clear_btn.pack(side=tk.LEFT, padx=5)
        self.chooser = ttk.Combobox(bottom, values=["File", "Directory"], width=10)
        self.chooser.current(0)
        self.chooser.pack(side=tk.RIGHT)
        self.add_btn = tk.Button(bottom, text="Add", command=self._add)
        self.add_btn.pack(side=tk.RIGHT, padx=3)
        self._set_add(False)

        self._reload()
        device = read_backup_device()
        if device:
            self.device.set(device)
            self.action.current(BackupAction.DRY_RUN)

    def _make_list(self, title: str):
        import tkinter as tk

        frame = tk.Frame(self.tabs)
        listbox = tk.Listbox(frame, exportselection=False)
        scroll = tk.Scrollbar(frame, command=listbox.yview)
        listbox.configure(yscrollcommand=scroll.set)
        scroll.pack(side=tk.RIGHT, fill=tk.Y)
        listbox.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.tabs.add(frame, text=title)
        return listbox

    def _set_add(self, enabled: bool) -> None:
        self.add_btn.configure(state="normal" if enabled else "disabled")
        self.chooser.configure(state="readonly" if enabled else "disabled")

    def _device_changed(self) -> None:
        self.action.configure(state="readonly")
        self.go.configure(state="normal")

    def _load(self, listbox, path: str) -> None:
        import tkinter as tk

        listbox.delete(0, tk.END)
        for line in read_list(path):
            listbox.insert(tk.END, line)

    def _reload(self) -> None:
        self._load(self.files, FILETOOL_LIST)
        self._load(self.xfiles, XFILETOOL_LIST)

    def _tab_changed(self) -> None:
        index = self.tabs.index("current")
        self._set_add(True)
        self.delete_btn.configure(state="disabled")
        if index == 1:
            self.target = FILETOOL_LIST
        elif index == 2:
            self.target = XFILETOOL_LIST
        else:
            self._set_add(False)

    def _selected(self, listbox, other) -> None:
        import tkinter as tk

        selection = listbox.curselection()
        if not selection:
            return
        self.line_number = selection[0] + 1
        self.item = listbox.get(selection[0])
        self.delete_btn.configure(state="normal")
        self._set_add(False)
        self.clear_btn.configure(state="normal")
        other.selection_clear(0, tk.END)

    def _delete(self) -> None:
        try:
            delete_line(self.target, self.line_number)
        except (OSError, ValueError) as error:
            print(error, file=sys.stderr)
        self._reload()
        self.delete_btn.configure(state="disabled")
        self.clear_btn.configure(state="disabled")
        self._set_add(True)

    def _clear(self) -> None:
        import tkinter as tk

        self.files.selection_clear(0, tk.END)
        self.xfiles.selection_clear(0, tk.END)
        self.delete_btn.configure(state="disabled")
        self._set_add(True)
        self.clear_btn.configure(state="disabled")

    def _add(self) -> None:
        from tkinter import filedialog

        directory = self.chooser.current() == 1
        kind = "directory" if directory else "file"
        title = f"Select {kind} to be added to {self.target}"
        if directory:
            chosen = filedialog.askdirectory(parent=self.root, initialdir=".", title=title)
        else:
            chosen = filedialog.askopenfilename(parent=self.root, initialdir=".", title=title)
        if not chosen:
            return
        try:
            append_entry(self.target, chosen[1:])
        except OSError:
            print(f"Can't open {self.target} file for output.", file=sys.stderr)
            self.root.destroy()
            raise SystemExit(1)
        self._reload()

    def _go(self) -> None:
        import tkinter as tk
        from tkinter import messagebox

        device = self.device.get()
        if not device:
            return
        action = BackupAction(max(self.action.current(), 0))
        if action is BackupAction.NONE:
            if messagebox.askyesno(
                "Filetool",
                "This will clear the selected backup device\n"
                "and prevent the backup from occuring.",
                parent=self.root,
            ):
                try:
                    clear_backup_device()
                except OSError as error:
                    print(error, file=sys.stderr)
                self.root.destroy()
            return
        self._set_add(False)
        self.results.delete(0, tk.END)
        self.tabs.select(0)
        self.root.configure(cursor="watch")
        self.root.update_idletasks()
        for line in _command_lines(filetool_command(action, device)):
            self.results.insert(tk.END, line)
            self.root.update_idletasks()
        self.root.configure(cursor="")


def main(argv: Optional[List[str]] = None) -> int:
    """Open the backup window."""
    import tkinter as tk

    root = tk.Tk()
    FiletoolWindow(root)
    root.mainloop()
    return 0
"""Small one-shot dialog commands: message, question, PDF viewer and pack loader."""

from __future__ import annotations

import subprocess
import sys
from typing import List, Optional, Sequence


def join_message(args: Sequence[str]) -> str:
    """Join arguments into one message, each followed by a space."""
    return "".join(f"{arg} " for arg in args)


def pdf_command(filename: str) -> str:
    """Shell command that opens ``filename`` in the PDF viewer in the background."""
    return f"mupdf {filename} &"


def loadpack_command(pack: str) -> str:
    """Shell command that loads a starter pack."""
    return f"sudo loadpack.sh '{pack}'"


def _args(argv: Optional[List[str]]) -> List[str]:
    return list(sys.argv[1:] if argv is None else argv)


def _hidden_root():
    import tkinter

    root = tkinter.Tk()
    root.withdraw()
    return root


def popup_main(argv: Optional[List[str]] = None) -> int:
    """Show the arguments as a message box."""
    from tkinter import messagebox

    root = _hidden_root()
    try:
        messagebox.showinfo("Message", join_message(_args(argv)), parent=root)
    finally:
        root.destroy()
    return 0


def popask_main(argv: Optional[List[str]] = None) -> int:
    """Ask the arguments as a yes/no question and print 1 for yes, 0 for no."""
    from tkinter import messagebox

    root = _hidden_root()
    try:
        answer = messagebox.askyesno("Question", join_message(_args(argv)), parent=root)
    finally:
        root.destroy()
    print(1 if answer else 0)
    return 0


def flpdf_main(argv: Optional[List[str]] = None) -> int:
    """Let the user pick a PDF file and open it in the viewer."""
    from tkinter import filedialog

    root = _hidden_root()
    try:
        filename = filedialog.askopenfilename(
            parent=root,
            initialdir=".",
            title="Select PDF File to view with mupdf: ",
            filetypes=[("PDF files", "*.pdf")],
        )
    finally:
        root.destroy()
    if not filename:
        return 1
    command = pdf_command(filename)
    print(command)
    subprocess.run(command, shell=True, check=False)
    return 0


def loadpack_main(argv: Optional[List[str]] = None) -> int:
    """Let the user pick a starter pack under /mnt and load it."""
    from tkinter import filedialog, messagebox

    root = _hidden_root()
    try:
        chosen = filedialog.askopenfilename(
            parent=root,
            initialdir="/mnt",
            title="Navigate to and Select Starter Pack to load.",
            filetypes=[("Starter packs", "*.gz")],
        )
        if not chosen:
            return 1
        pack = chosen[1:]
        print(pack)
        result = subprocess.run(loadpack_command(pack), shell=True, check=False)
        if result.returncode == 0:
            messagebox.showinfo("Loadpack", f"{pack} successfully loaded.", parent=root)
    finally:
        root.destroy()
    return 0
"""Network interface settings: DHCP or a static address, optionally saved for boot."""

from __future__ import annotations

import ipaddress
import os
import stat
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

RESOLV_CONF = "/etc/resolv.conf"
HOSTNAME_FILE = "/etc/hostname"
BOOTLOCAL = "/opt/bootlocal.sh"
FILETOOL_LIST = "/opt/.filetool.lst"
DEFAULT_INTERFACE = "eth0"
DEFAULT_NETMASK = "255.255.255.0"

PathLike = Union[str, os.PathLike]


@dataclass
class StaticConfig:
    """Settings for a statically configured interface."""

    interface: str = DEFAULT_INTERFACE
    ipaddress: str = ""
    netmask: str = DEFAULT_NETMASK
    broadcast: str = ""
    gateway: str = ""
    nameserver1: str = ""
    nameserver2: str = ""


def guess_gateway(ip: str) -> str:
    """The address with its last part replaced by 254."""
    head, dot, _tail = ip.rpartition(".")
    return f"{head if dot else ip}.254"


def dhcp_command(interface: str, hostname: str) -> str:
    """Shell command that starts the DHCP client on ``interface`` in the background."""
    return (
        f"sudo udhcpc -x hostname:{hostname} -b -i {interface}"
        f" -p /var/run/udhcpc.{interface}.pid  &"
    )


def static_commands(config: StaticConfig) -> List[str]:
    """Shell commands that apply a static configuration, in order."""
    commands = [
        "sudo /usr/bin/pkill udhcpc >/dev/null",
        f"sudo /sbin/ifconfig {config.interface} {config.ipaddress}"
        f" netmask {config.netmask} broadcast {config.broadcast} up",
        f"sudo /sbin/route add default gw {config.gateway}",
        f"echo nameserver {config.nameserver1}|sudo tee /etc/resolv.conf",
    ]
    if config.nameserver2:
        commands.append(
            f"echo nameserver {config.nameserver2}|sudo tee -a /etc/resolv.conf"
        )
    return commands


def boot_script(config: StaticConfig, dhcp: bool, hostname: str) -> str:
    """Text of the script that brings the interface up at boot."""
    lines = ["#!/bin/sh", "pkill udhcpc"]
    if dhcp:
        lines.append(
            f"udhcpc -b -i {config.interface} -x hostname:{hostname}"
            " -p /var/run/udhcpc.eth0.pid"
        )
    else:
        lines.append(
            f"ifconfig {config.interface} {config.ipaddress} netmask {config.netmask}"
            f" broadcast {config.broadcast} up"
        )
        lines.append(f"route add default gw {config.gateway}")
        lines.append(f"echo nameserver {config.nameserver1} > /etc/resolv.conf")
        if config.nameserver2:
            lines.append(f"echo nameserver {config.nameserver2} >> /etc/resolv.conf")
    return "".join(f"{line}\n" for line in lines)


def parse_nameservers(text: str) -> List[str]:
    """Name server addresses listed in resolv.conf text, in order."""
    servers = []
    for line in text.splitlines():
        if line.startswith("nameserver"):
            fields = line.split(" ")
            servers.append(fields[1] if len(fields) > 1 else line)
    return servers


def _broadcast(ip: str, netmask: str) -> str:
    try:
        network = ipaddress.IPv4Network(f"{ip}/{netmask}", strict=False)
    except ValueError:
        return ""
    return str(network.broadcast_address)


def _replace_entry(path: PathLike, marker: str, line: str) -> None:
    """Drop lines holding ``marker`` from a file and append ``line``."""
    target = Path(path)
    try:
        kept = [
            old
            for old in target.read_text(encoding="utf-8", errors="replace").splitlines()
            if marker not in old
        ]
    except OSError:
        kept = []
    kept.append(line)
    target.write_text("".join(f"{entry}\n" for entry in kept), encoding="utf-8")


def _save_boot(config: StaticConfig, dhcp: bool, hostname: str) -> None:
    script = Path("/opt") / f"{config.interface}.sh"
    script.write_text(boot_script(config, dhcp, hostname), encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    marker = f"{config.interface}.sh"
    _replace_entry(BOOTLOCAL, marker, f"/opt/{config.interface}.sh &")
    _replace_entry(FILETOOL_LIST, marker, f"opt/{config.interface}.sh")


def _read(path: PathLike) -> str:
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


def main(argv: Optional[List[str]] = None) -> int:
    """Open the network settings window."""
    import tkinter as tk

    servers = parse_nameservers(_read(RESOLV_CONF))
    host_lines = _read(HOSTNAME_FILE).splitlines()
    hostname = host_lines[0] if host_lines else ""

    root = tk.Tk()
    root.title("Network")
    bold = ("Helvetica", 12, "bold")

    def field(label: Optional[str], value: str = "") -> tk.Entry:
        if label is not None:
            tk.Label(root, text=label, font=bold).pack(anchor="w", padx=15)
        entry = tk.Entry(root, width=16)
        entry.insert(0, value)
        entry.pack(padx=15, pady=(0, 4))
        return entry

    interface = field("Interface", DEFAULT_INTERFACE)

    tk.Label(root, text="Use DHCP Broadcast?", font=bold).pack(anchor="w", padx=5)
    dhcp = tk.BooleanVar(master=root, value=False)
    row = tk.Frame(root)
    row.pack()

    ip_entry = field("IP Address")
    mask_entry = field("Network Mask", DEFAULT_NETMASK)
    bcast_entry = field("Broadcast")
    gw_entry = field("Gateway")
    ns1_entry = field("NameServers", servers[0] if servers else "")
    ns2_entry = field(None, servers[1] if len(servers) > 1 else "")
    static_entries = (ip_entry, mask_entry, bcast_entry, gw_entry, ns1_entry, ns2_entry)

    def dhcp_changed() -> None:
        state = tk.DISABLED if dhcp.get() else tk.NORMAL
        for entry in static_entries:
            entry.configure(state=state)

    tk.Radiobutton(row, text="yes", variable=dhcp, value=True, command=dhcp_changed).pack(
        side=tk.LEFT
    )
    tk.Radiobutton(row, text="no", variable=dhcp, value=False, command=dhcp_changed).pack(
        side=tk.LEFT
    )

    def fill_from_ip(_event=None) -> None:
        ip = ip_entry.get()
        bcast_entry.delete(0, tk.END)
        bcast_entry.insert(0, _broadcast(ip, mask_entry.get()))
        gw_entry.delete(0, tk.END)
        gw_entry.insert(0, guess_gateway(ip))

    ip_entry.bind("<Return>", fill_from_ip)
    ip_entry.bind("<FocusOut>", fill_from_ip)

    tk.Label(root, text="Save Configuration?", font=bold).pack(anchor="w", padx=5)
    save = tk.BooleanVar(master=root, value=True)
    save_row = tk.Frame(root)
    save_row.pack()
    tk.Radiobutton(save_row, text="yes", variable=save, value=True).pack(side=tk.LEFT)
    tk.Radiobutton(save_row, text="no", variable=save, value=False).pack(side=tk.LEFT)

    status = {"code": 0}

    def apply() -> None:
        config = StaticConfig(
            interface=interface.get(),
            ipaddress=ip_entry.get(),
            netmask=mask_entry.get(),
            broadcast=bcast_entry.get(),
            gateway=gw_entry.get(),
            nameserver1=ns1_entry.get(),
            nameserver2=ns2_entry.get(),
        )
        if dhcp.get():
            commands = [dhcp_command(config.interface, hostname)]
        else:
            commands = static_commands(config)
        for command in commands:
            subprocess.run(command, shell=True, check=False)
        if save.get():
            try:
                _save_boot(config, dhcp.get(), hostname)
            except OSError:
                print("Can't open output file.", file=sys.stderr)
                status["code"] = 1
                root.destroy()

    buttons = tk.Frame(root)
    buttons.pack(pady=8)
    tk.Button(buttons, text="Apply", underline=0, command=apply).pack(side=tk.LEFT, padx=3)
    tk.Button(buttons, text="Exit", underline=1, command=root.destroy).pack(
        side=tk.LEFT, padx=3
    )
    root.mainloop()
    return status["code"]
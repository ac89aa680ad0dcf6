"""Helpers describing the machine a scan runs on."""

from __future__ import annotations

import getpass
import os
import subprocess
from pathlib import Path
from typing import List, Optional

UNKNOWN = "unknown"


def sys_platform() -> str:
    """Return the lowercase platform identifier."""

    return os.uname().sysname.lower() if hasattr(os, "uname") else os.name.lower()


def is_windows(platform: Optional[str] = None) -> bool:
    """Return ``True`` for the Windows platform family.

    ``platform`` defaults to :func:`sys_platform`; on Windows ``os.uname`` is
    missing and the identifier is ``os.name`` (``"nt"``).
    """

    system = sys_platform() if platform is None else platform.lower()
    return system == "nt" or system.startswith("win")


def _command_output(command: List[str]) -> Optional[str]:
    try:
        proc = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
            text=True,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    return proc.stdout.strip() or None


def get_computer_name() -> str:
    """Return the human facing name of this computer.

    macOS reports the name set in the sharing preferences, Windows and Linux the
    host name. ``"unknown"`` is returned when nothing can be determined.
    """

    system = sys_platform()
    if system == "darwin":
        return _command_output(["scutil", "--get", "ComputerName"]) or UNKNOWN

    if is_windows(system):
        return _command_output(["cmd", "/c", "hostname"]) or UNKNOWN

    if system == "linux":
        try:
            name = Path("/etc/hostname").read_text(encoding="utf-8", errors="ignore").strip()
        except OSError:
            name = ""
        if name:
            return name
        return _command_output(["hostname"]) or UNKNOWN

    return UNKNOWN


def get_user_name() -> str:
    """Return the login name of the current user."""

    try:
        return getpass.getuser() or UNKNOWN
    except (KeyError, OSError):
        # getpwuid fails for uids without a passwd entry
        return UNKNOWN

"""Shared fixtures: fake Java launchers laid out in temporary trees."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest

posix_only = pytest.mark.skipif(os.name == "nt", reason="needs POSIX permission bits and shell scripts")

TEMURIN_DUMP = """Property settings:
    file.encoding = UTF-8
    java.class.path = 
    java.home = /opt/jdk-17
    java.library.path = /usr/java/packages/lib
        /usr/lib64
        /lib64
    java.runtime.name = OpenJDK Runtime Environment
    java.runtime.version = 17.0.9+9
    java.vendor = Eclipse Adoptium
    java.version = 17.0.9
    os.arch = amd64

"""

ORACLE_DUMP = """Property settings:
    java.runtime.name = Java(TM) SE Runtime Environment
    java.vendor = Oracle Corporation
    java.version = 21.0.1

"""


def write_launcher(path: Path, stderr_text: str = TEMURIN_DUMP, exit_code: int = 0) -> Path:
    """Write a shell script that behaves like ``java -XshowSettings:properties --version``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        "#!/bin/sh\n"
        "cat >&2 <<'JFIND_EOF'\n"
        f"{stderr_text}"
        "JFIND_EOF\n"
        'echo "openjdk 17.0.9 2023-10-17"\n'
        f"exit {exit_code}\n",
        encoding="utf-8",
    )
    path.chmod(0o755)
    return path


@pytest.fixture
def make_launcher(tmp_path: Path) -> Callable[..., Path]:
    def _make(relative: str, stderr_text: str = TEMURIN_DUMP, exit_code: int = 0) -> Path:
        return write_launcher(tmp_path / relative, stderr_text, exit_code)

    return _make


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., Path]:
    def _make(relative: str, mode: int = 0o644, content: bytes = b"") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        path.chmod(mode)
        return path

    return _make

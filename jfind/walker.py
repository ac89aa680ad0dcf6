"""Depth bounded traversal of a directory tree."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

DirectoryHandler = Callable[[str], None]
ErrorHandler = Callable[[str, OSError], None]


@dataclass(frozen=True)
class WalkEntry:
    """A filesystem entry produced by :func:`walk`.

    ``mode`` comes from ``lstat``: symbolic links are reported as links and are
    never followed into.
    """

    path: str
    name: str
    depth: int
    mode: int

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)


def _list_dir(path: str) -> List[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda entry: entry.name)


def _within_depth(depth: int, max_depth: int) -> bool:
    return max_depth < 0 or depth <= max_depth


def walk(
    root: str,
    max_depth: int = -1,
    *,
    on_directory: Optional[DirectoryHandler] = None,
    on_error: Optional[ErrorHandler] = None,
) -> Iterator[WalkEntry]:
    """Walk ``root`` depth first and return a lazy iterator of entries.

    ``root`` must already be absolute. It is ``lstat``-ed immediately, so an
    unusable root raises ``OSError`` from this call rather than from iteration.
    Everything after that is reported to ``on_error`` and never raised.

    ``on_directory`` is called once for every directory reached, including
    those beyond ``max_depth`` which are then neither yielded nor descended
    into. A negative ``max_depth`` means unlimited.
    """

    root_mode = os.lstat(root).st_mode
    first = WalkEntry(root, os.path.basename(root) or root, 0, root_mode)
    return _walk(first, max_depth, on_directory, on_error)


def _walk(
    first: WalkEntry,
    max_depth: int,
    on_directory: Optional[DirectoryHandler],
    on_error: Optional[ErrorHandler],
) -> Iterator[WalkEntry]:
    stack = [first]
    while stack:
        entry = stack.pop()
        if entry.is_dir and on_directory is not None:
            on_directory(entry.path)

        if not _within_depth(entry.depth, max_depth):
            continue

        yield entry

        if not entry.is_dir:
            continue

        try:
            children = _list_dir(entry.path)
        except OSError as exc:
            # an unlistable directory prunes its subtree
            if on_error is not None:
                on_error(entry.path, exc)
            continue

        pending = []
        for child in children:
            try:
                mode = child.stat(follow_symlinks=False).st_mode
            except OSError as exc:
                if on_error is not None:
                    on_error(child.path, exc)
                continue
            pending.append(WalkEntry(child.path, child.name, entry.depth + 1, mode))

        stack.extend(reversed(pending))

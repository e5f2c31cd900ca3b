#!/usr/bin/env python3
"""
KUBECOMPASS FILESYSTEM - Swappable Storage Backend
--------------------------------------------------
The resolution layer never touches the disk directly. It talks to a narrow
FileSystem capability so the same logic runs against a real application
tree (OsFileSystem) or an in-memory fixture (MemoryFileSystem).

All listings are returned sorted by name, so every scan is deterministic.

Author: KubeCompass Team
Date: 2026-10-17
"""

import os
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Set


@dataclass(frozen=True)
class DirEntry:
    """One immediate child of a directory."""
    name: str
    is_dir: bool


class FileSystem:
    """
    Capability interface. Implementations raise FileNotFoundError for
    missing paths, NotADirectoryError when listing a file, and any other
    OSError for the remaining I/O failures.
    """

    def list_dir(self, path: str) -> List[DirEntry]:
        raise NotImplementedError

    def is_dir(self, path: str) -> bool:
        raise NotImplementedError

    def exists(self, path: str) -> bool:
        raise NotImplementedError

    def read_text(self, path: str) -> str:
        raise NotImplementedError

    def write_text(self, path: str, content: str) -> None:
        raise NotImplementedError


class OsFileSystem(FileSystem):
    """The real disk, via pathlib."""

    def list_dir(self, path: str) -> List[DirEntry]:
        entries = []
        for child in Path(path).iterdir():
            # Symlinked directories are listed as plain entries to keep walks finite
            is_dir = child.is_dir() and not child.is_symlink()
            entries.append(DirEntry(name=child.name, is_dir=is_dir))
        return sorted(entries, key=lambda e: e.name)

    def is_dir(self, path: str) -> bool:
        return Path(path).is_dir()

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def read_text(self, path: str) -> str:
        # BOM-aware, manifests written on Windows often carry one
        return Path(path).read_text(encoding="utf-8-sig")

    def write_text(self, path: str, content: str) -> None:
        target = Path(path)
        temp_file = target.with_suffix(target.suffix + ".kubecompass.tmp")
        try:
            temp_file.write_text(content, encoding="utf-8")
            os.replace(temp_file, target)
        except OSError:
            if temp_file.exists():
                temp_file.unlink()
            raise


class MemoryFileSystem(FileSystem):
    """
    A dict-backed tree for tests and dry runs. Paths are POSIX-style;
    parent directories are created implicitly when a file is written.
    """

    def __init__(self, files: Dict[str, str] = None):
        self.files: Dict[str, str] = {}
        self.dirs: Set[str] = {"/"}
        for path, content in (files or {}).items():
            self.write_text(path, content)

    @staticmethod
    def _norm(path: str) -> str:
        return posixpath.normpath(posixpath.join("/", path))

    def mkdir(self, path: str) -> None:
        path = self._norm(path)
        while path not in self.dirs:
            if path in self.files:
                raise NotADirectoryError(path)
            self.dirs.add(path)
            path = posixpath.dirname(path)

    def list_dir(self, path: str) -> List[DirEntry]:
        path = self._norm(path)
        if path in self.files:
            raise NotADirectoryError(path)
        if path not in self.dirs:
            raise FileNotFoundError(path)

        entries = []
        for d in self.dirs:
            if d != path and posixpath.dirname(d) == path:
                entries.append(DirEntry(name=posixpath.basename(d), is_dir=True))
        for f in self.files:
            if posixpath.dirname(f) == path:
                entries.append(DirEntry(name=posixpath.basename(f), is_dir=False))
        return sorted(entries, key=lambda e: e.name)

    def is_dir(self, path: str) -> bool:
        return self._norm(path) in self.dirs

    def exists(self, path: str) -> bool:
        path = self._norm(path)
        return path in self.dirs or path in self.files

    def read_text(self, path: str) -> str:
        path = self._norm(path)
        if path in self.dirs:
            raise IsADirectoryError(path)
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    def write_text(self, path: str, content: str) -> None:
        path = self._norm(path)
        if path in self.dirs:
            raise IsADirectoryError(path)
        self.mkdir(posixpath.dirname(path))
        self.files[path] = content

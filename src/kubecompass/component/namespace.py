#!/usr/bin/env python3
"""
KUBECOMPASS NAMESPACES
----------------------
A namespace is a directory under <root>/components that holds the reserved
parameters file. Namespaces are cheap handles: they are rebuilt from a path
fragment on every call and read the directory fresh each time.

Author: KubeCompass Team
Date: 2026-10-17
"""

import logging
import os
from typing import List, Tuple

from kubecompass.component.component import Component, is_component_file, make_component
from kubecompass.core.app import PARAMS_FILE, App
from kubecompass.core.errors import io_error
from kubecompass.fs.filesystem import DirEntry, FileSystem

logger = logging.getLogger("kubecompass.namespace")

SEPARATOR = "/"


class Namespace:
    """
    Handle for one namespace directory. Equal (and hashable) by the owning
    application root and the path relative to components/, so it can key
    the grouping produced by make_paths_by_namespace.
    """

    def __init__(self, app: App, path: str = ""):
        self.app = app
        # "", "/" and "/a/" style fragments all collapse to a bare relative path
        self.path = path.strip(SEPARATOR)

    @property
    def dir(self) -> str:
        if not self.path:
            return self.app.components_dir
        return os.path.join(self.app.components_dir, *self.path.split(SEPARATOR))

    @property
    def params_path(self) -> str:
        return os.path.join(self.dir, self.app.params_file)

    def components(self) -> List[Component]:
        """Builds a component for every recognized file directly in dir."""
        members = []
        for entry in read_dir(self.app.fs, self.dir):
            if entry.is_dir or entry.name == self.app.params_file:
                continue
            if not is_component_file(entry.name):
                continue
            members.append(make_component(self.app, self.path, os.path.join(self.dir, entry.name)))

        logger.debug(f"Namespace {self.path or '/'!r} holds {len(members)} components")
        return members

    def _key(self) -> Tuple[str, str]:
        return self.app.root, self.path

    def __eq__(self, other) -> bool:
        if not isinstance(other, Namespace):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"Namespace({self.path or '/'!r})"


def read_dir(fs: FileSystem, path: str) -> List[DirEntry]:
    try:
        return fs.list_dir(path)
    except OSError as e:
        raise io_error(path, e) from e


def has_params_file(entries: List[DirEntry], params_file: str = PARAMS_FILE) -> bool:
    return any(e.name == params_file and not e.is_dir for e in entries)


def is_component_dir(fs: FileSystem, path: str, params_file: str = PARAMS_FILE) -> bool:
    """
    True iff `path` directly contains a file named exactly `params_file`.
    A directory with that name does not qualify.
    """
    return has_params_file(read_dir(fs, path), params_file)


def extract_namespaced_component(app: App, raw_name: str) -> Tuple[Namespace, str]:
    """
    Splits `raw_name` on its last separator into (namespace, local name).

        "app/bar"  -> (Namespace("app"), "bar")
        "bar"      -> (Namespace(""), "bar")
        "/bar"     -> (Namespace(""), "bar")
        "app/"     -> (Namespace("app"), "")
    """
    ns_path, sep, local_name = raw_name.rpartition(SEPARATOR)
    if not sep:
        return Namespace(app), raw_name
    return Namespace(app, ns_path), local_name


def join_name(ns_name: str, name: str) -> str:
    """Inverse of extract_namespaced_component; "" and "/" mean the root."""
    parts = []
    if ns_name and ns_name != SEPARATOR:
        parts.append(ns_name)
    parts.append(name)
    return SEPARATOR.join(parts)


def namespaces(app: App) -> List[Namespace]:
    """Every valid namespace in the application, depth-first by name."""
    found = []

    def visit(rel_path: str):
        ns = Namespace(app, rel_path)
        entries = read_dir(app.fs, ns.dir)
        if has_params_file(entries, app.params_file):
            found.append(ns)
        for entry in entries:
            if entry.is_dir:
                visit(f"{rel_path}{SEPARATOR}{entry.name}" if rel_path else entry.name)

    visit("")
    return found

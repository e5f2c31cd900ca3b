#!/usr/bin/env python3
"""
KUBECOMPASS RESOLVER - Name to Artifact
---------------------------------------
Turns user-facing component names ("app/bar", "bar") into either the
backing file path or a live Component, and groups an environment's
component paths by namespace.

Two resolution paths exist and they are not reconciled:

* path()              - filename based; rejects basename collisions.
* extract_component() - object based; matches Component.name(False).

They agree as long as a component's name is its file basename.

Author: KubeCompass Team
Date: 2026-10-17
"""

import os
from typing import Dict, List

from kubecompass.component.component import Component, trim_ext
from kubecompass.component.locator import ComponentPathLocator
from kubecompass.component.namespace import (
    Namespace,
    extract_namespaced_component,
    join_name,
    read_dir,
)
from kubecompass.core.app import COMPONENTS_ROOT, App
from kubecompass.core.errors import ComponentError, ErrorKind


def path(app: App, name: str) -> str:
    """
    Returns the file backing component `name`. Every file in the namespace
    directory is checked, so a collision anywhere in it is an error even if
    it does not involve the requested name.
    """
    ns, local_name = extract_namespaced_component(app, name)

    file_name = None
    seen = set()

    for entry in read_dir(app.fs, ns.dir):
        if entry.is_dir:
            continue

        base = trim_ext(entry.name)
        if base in seen:
            raise ComponentError(
                ErrorKind.AMBIGUOUS,
                f"Found multiple component files with component name {name!r}",
                path=ns.dir, name=name)
        seen.add(base)

        if base == local_name:
            file_name = entry.name

    if file_name is None:
        raise ComponentError(
            ErrorKind.NOT_FOUND, f"No component name {name!r} found", name=name)

    return os.path.join(ns.dir, file_name)


def extract_component(app: App, path: str) -> Component:
    """Finds the live member of the namespace named by `path`."""
    ns, component_name = extract_namespaced_component(app, path)

    for member in ns.components():
        if member.name(False) == component_name:
            return member

    raise ComponentError(
        ErrorKind.NOT_FOUND, f"unable to find component {component_name!r}",
        name=component_name)


def locate_component(app: App, ns_name: str, name: str) -> Component:
    return extract_component(app, join_name(ns_name, name))


def make_paths(app: App, env: str) -> List[str]:
    """Every component file path the environment contributes."""
    try:
        locator = ComponentPathLocator(app, env)
    except ComponentError as e:
        raise ComponentError(
            e.kind, f"create component path locator: {e.message}",
            path=e.path, name=e.name) from e

    return locator.locate()


def make_paths_by_namespace(app: App, env: str) -> Dict[Namespace, List[str]]:
    """
    Groups make_paths() by owning namespace. Namespaces appear in first-seen
    order; paths keep the order make_paths() returned them in.
    """
    paths = make_paths(app, env)

    root = app.root
    if root.endswith("/"):
        prefix = root + COMPONENTS_ROOT + "/"
    else:
        prefix = root + "/" + COMPONENTS_ROOT + "/"

    grouped: Dict[Namespace, List[str]] = {}
    for component_path in paths:
        rel_path = component_path
        if rel_path.startswith(prefix):
            rel_path = rel_path[len(prefix):]

        ns, _ = extract_namespaced_component(app, rel_path)
        grouped.setdefault(ns, []).append(component_path)

    return grouped

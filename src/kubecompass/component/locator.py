#!/usr/bin/env python3
"""
KUBECOMPASS PATH LOCATOR - The Surveyor
---------------------------------------
Walks the components/ tree for one environment and returns every component
file it contributes. An environment without targets sees the whole tree;
one with targets sees only the namespaces and files it names.

Author: KubeCompass Team
Date: 2026-10-17
"""

import logging
import os
from typing import List

from kubecompass.component.component import is_component_file
from kubecompass.component.namespace import has_params_file, is_component_dir, read_dir
from kubecompass.core.app import App, EnvironmentConfig
from kubecompass.core.errors import ComponentError, ErrorKind, io_error

logger = logging.getLogger("kubecompass.locator")


class ComponentPathLocator:
    """
    Resolves the component file set of an environment. Holds no state
    beyond its inputs; locate() re-reads the tree on every call.
    """

    def __init__(self, app: App, env_name: str):
        self.app = app
        self.env: EnvironmentConfig = app.environment(env_name)

    def locate(self) -> List[str]:
        if not self.env.targets:
            paths = self._all_paths()
        else:
            paths = []
            for target in self.env.targets:
                paths.extend(self._target_paths(target))

        logger.debug(f"Environment {self.env.name!r} resolves to {len(paths)} component paths")
        return sorted(set(paths))

    def _all_paths(self) -> List[str]:
        paths = []
        stack = [self.app.components_dir]

        while stack:
            current = stack.pop()
            entries = read_dir(self.app.fs, current)

            if has_params_file(entries, self.app.params_file):
                paths.extend(self._namespace_paths(current))

            # Reversed so the stack pops children in name order
            for entry in reversed(entries):
                if entry.is_dir:
                    stack.append(os.path.join(current, entry.name))

        return paths

    def _target_paths(self, target: str) -> List[str]:
        path = os.path.join(self.app.components_dir, *target.strip("/").split("/"))
        fs = self.app.fs

        if fs.is_dir(path):
            if not is_component_dir(fs, path, self.app.params_file):
                raise ComponentError(
                    ErrorKind.INVALID, f"{path} is not a component directory", path=path)
            return self._namespace_paths(path)

        if not fs.exists(path):
            err = FileNotFoundError(f"target {target!r} does not exist")
            raise io_error(path, err, action="stat") from err

        return [path]

    def _namespace_paths(self, path: str) -> List[str]:
        """Component files directly inside a namespace directory."""
        paths = []
        for entry in read_dir(self.app.fs, path):
            if entry.is_dir or entry.name == self.app.params_file:
                continue
            if is_component_file(entry.name):
                paths.append(os.path.join(path, entry.name))
        return paths

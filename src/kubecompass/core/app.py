#!/usr/bin/env python3
"""
KUBECOMPASS APPLICATION CONTEXT
-------------------------------
Holds everything the resolution layer needs to know about one application:
its root directory, the filesystem it lives on, and the environments
declared in app.yaml.

Author: KubeCompass Team
Date: 2026-10-17
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML, YAMLError

from kubecompass.core.errors import ComponentError, ErrorKind, io_error
from kubecompass.fs.filesystem import FileSystem, OsFileSystem

logger = logging.getLogger("kubecompass.app")

APP_FILE = "app.yaml"
COMPONENTS_ROOT = "components"
PARAMS_FILE = "params.libsonnet"
DEFAULT_ENV = "default"


@dataclass
class EnvironmentConfig:
    name: str
    targets: List[str] = field(default_factory=list)   # Paths relative to components/


@dataclass
class AppConfig:
    """The subset of app.yaml the component layer consumes."""
    name: str = ""
    environments: Dict[str, EnvironmentConfig] = field(default_factory=dict)
    params_file: str = PARAMS_FILE

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AppConfig":
        data = data or {}
        if not isinstance(data, dict):
            raise ComponentError(ErrorKind.INVALID, f"{APP_FILE} must contain a mapping")

        env_section = data.get("environments") or {}
        if not isinstance(env_section, dict):
            raise ComponentError(ErrorKind.INVALID, "environments must be a mapping of name to settings")

        environments = {}
        for env_name, env_data in env_section.items():
            env_data = env_data or {}
            if not isinstance(env_data, dict):
                raise ComponentError(
                    ErrorKind.INVALID,
                    f"settings for environment {env_name!r} must be a mapping",
                    name=str(env_name))
            targets = env_data.get("targets") or []
            if not isinstance(targets, list):
                raise ComponentError(
                    ErrorKind.INVALID,
                    f"targets for environment {env_name!r} must be a list",
                    name=env_name)
            environments[env_name] = EnvironmentConfig(
                name=env_name, targets=[str(t) for t in targets])

        if not environments:
            environments[DEFAULT_ENV] = EnvironmentConfig(name=DEFAULT_ENV)

        return cls(
            name=str(data.get("name") or ""),
            environments=environments,
            params_file=str(data.get("paramsFile") or PARAMS_FILE),
        )


class App:
    """
    Application context. Constructed by the caller and threaded through
    every resolution call; the component layer never builds one itself.
    """

    def __init__(self, root: str, fs: Optional[FileSystem] = None,
                 config: Optional[AppConfig] = None):
        self._root = root
        self._fs = fs or OsFileSystem()
        self.config = config or AppConfig.from_dict(None)

    @classmethod
    def load(cls, root: str, fs: Optional[FileSystem] = None) -> "App":
        """Reads <root>/app.yaml when present. A missing file yields defaults."""
        fs = fs or OsFileSystem()
        app_file = os.path.join(root, APP_FILE)

        if not fs.exists(app_file):
            logger.debug(f"No {APP_FILE} under {root}, using defaults")
            return cls(root, fs)

        try:
            raw = fs.read_text(app_file)
        except OSError as e:
            raise io_error(app_file, e, action="read") from e

        try:
            data = YAML(typ="safe").load(raw)
        except YAMLError as e:
            raise ComponentError(
                ErrorKind.INVALID, f"parse {app_file}: {e}", path=app_file) from e

        return cls(root, fs, AppConfig.from_dict(data))

    @property
    def fs(self) -> FileSystem:
        return self._fs

    @property
    def root(self) -> str:
        return self._root

    @property
    def params_file(self) -> str:
        return self.config.params_file

    @property
    def components_dir(self) -> str:
        return os.path.join(self._root, COMPONENTS_ROOT)

    def environment(self, name: str) -> EnvironmentConfig:
        env = self.config.environments.get(name)
        if env is None:
            raise ComponentError(
                ErrorKind.NOT_FOUND, f"environment {name!r} was not found", name=name)
        return env

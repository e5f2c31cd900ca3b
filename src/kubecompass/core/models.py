#!/usr/bin/env python3
"""
KUBECOMPASS CORE MODELS
-----------------------
Value types shared by the component layer: parameter options, component
summaries and the group/version/kind triple derived from them.

Author: KubeCompass Team
Date: 2026-10-17
"""

from dataclasses import dataclass
from typing import Any

from kubecompass.core.errors import ComponentError, ErrorKind


@dataclass
class ParamOptions:
    """Call-scoped options for SetParam/DeleteParam."""
    index: int = 0          # Document index inside a multi-document component


@dataclass(frozen=True)
class TypeSpec:
    """
    A parsed group/version/kind triple. The core API group is the empty
    string, matching how Kubernetes spells `apiVersion: v1`.
    """
    group: str
    version: str
    kind: str

    @classmethod
    def parse(cls, api_version: str, kind: str) -> "TypeSpec":
        """
        Builds a TypeSpec from an apiVersion ("v1", "apps/v1") and a Kind.
        Raises ComponentError(MALFORMED_GVK) when either part is unusable.
        """
        if not kind:
            raise ComponentError(
                ErrorKind.MALFORMED_GVK,
                f"kind is required for apiVersion {api_version!r}")

        parts = (api_version or "").split("/")
        if len(parts) == 1:
            group, version = "", parts[0]
        elif len(parts) == 2:
            group, version = parts
            if not group:
                raise ComponentError(
                    ErrorKind.MALFORMED_GVK,
                    f"unexpected GroupVersion string: {api_version!r}")
        else:
            raise ComponentError(
                ErrorKind.MALFORMED_GVK,
                f"unexpected GroupVersion string: {api_version!r}")

        if not version:
            raise ComponentError(
                ErrorKind.MALFORMED_GVK,
                f"apiVersion is required for kind {kind!r}")

        return cls(group=group, version=version, kind=kind)

    @property
    def api_version(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    def __str__(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"


@dataclass(frozen=True)
class Summary:
    """
    A read-only reporting projection of one object emitted by a component.
    """
    component_name: str
    index_str: str
    index: int
    type: str
    api_version: str = ""
    kind: str = ""
    name: str = ""

    def type_spec(self) -> TypeSpec:
        return TypeSpec.parse(self.api_version, self.kind)


@dataclass(frozen=True)
class NamespaceParameter:
    """One parameter entry reported by Component.params()."""
    component: str
    index: str              # Document index as a string, "*" for whole component
    key: str                # Dotted path to the leaf (e.g. 'spec.replicas')
    value: Any

#!/usr/bin/env python3
"""
KUBECOMPASS ERRORS
------------------
Structured failures raised by the resolution layer. Every error carries a
kind so callers (and tests) can branch on the condition instead of parsing
message strings.

Author: KubeCompass Team
Date: 2026-10-17
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    IO = "io"
    AMBIGUOUS = "ambiguous"
    NOT_FOUND = "not_found"
    MALFORMED_GVK = "malformed_gvk"
    INVALID = "invalid"
    UNSUPPORTED = "unsupported"


class ComponentError(Exception):
    """
    Raised by every resolution operation.

    Attributes:
        kind: The ErrorKind describing the failed condition.
        path: Filesystem path involved, when there is one.
        name: Component (or environment) name involved, when there is one.
    """

    def __init__(self, kind: ErrorKind, message: str,
                 path: Optional[str] = None, name: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.path = path
        self.name = name

    @property
    def message(self) -> str:
        return self.args[0]

    def __repr__(self) -> str:
        return f"ComponentError({self.kind.name}, {self.message!r})"


def io_error(path: str, err: OSError, action: str = "read files in") -> ComponentError:
    """Wraps an OSError with the operation context. Chain it with `from err`."""
    return ComponentError(ErrorKind.IO, f"{action} {path}: {err}", path=path)

#!/usr/bin/env python3
"""
KUBECOMPASS COMPONENTS - Backing Format Variants
------------------------------------------------
A component is one file inside a namespace directory. The backing format
decides what the component can do:

* YamlComponent    - static YAML/JSON manifests. Objects, parameters and
                     summaries are read straight from the documents, and
                     parameter edits are written back with comment-preserving
                     round-trips.
* JsonnetComponent - Jsonnet sources. They can be named, located and
                     summarized, but never evaluated.

Variants are chosen by file extension through COMPONENT_TYPES.

Author: KubeCompass Team
Date: 2026-10-17
"""

import io
import json
import logging
import os
from typing import Any, Dict, List

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.comments import CommentedMap

from kubecompass.core.errors import ComponentError, ErrorKind, io_error
from kubecompass.core.models import NamespaceParameter, ParamOptions, Summary

logger = logging.getLogger("kubecompass.component")


class Component:
    """
    Shared capability set. Identity inside a namespace is name(False):
    the file name with its extension stripped.
    """

    type_name = ""

    def __init__(self, app, namespace_path: str, source: str):
        self.app = app
        self.namespace_path = namespace_path
        self.source = source        # Full filesystem path of the backing file

    def name(self, wants_namespaced: bool = False) -> str:
        base = trim_ext(os.path.basename(self.source))
        if wants_namespaced and self.namespace_path:
            return f"{self.namespace_path}/{base}"
        return base

    def objects(self, params_str: str = "", env_name: str = "") -> List[Dict[str, Any]]:
        raise NotImplementedError

    def set_param(self, path: List[str], value: Any, options: ParamOptions = None) -> None:
        raise NotImplementedError

    def delete_param(self, path: List[str], options: ParamOptions = None) -> None:
        raise NotImplementedError

    def params(self, env_name: str = "") -> List[NamespaceParameter]:
        raise NotImplementedError

    def summarize(self) -> List[Summary]:
        raise NotImplementedError

    def _unsupported(self, action: str) -> ComponentError:
        return ComponentError(
            ErrorKind.UNSUPPORTED,
            f"{action} is not supported for {self.type_name} component {self.name(True)!r}",
            path=self.source, name=self.name(False))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name(True)!r})"


class YamlComponent(Component):
    """A static manifest, possibly holding several documents."""

    def __init__(self, app, namespace_path: str, source: str):
        super().__init__(app, namespace_path, source)
        ext = os.path.splitext(source)[1].lower()
        self.type_name = "json" if ext == ".json" else "yaml"

    def _round_trip_yaml(self) -> YAML:
        yaml = YAML(typ="rt")
        yaml.preserve_quotes = True
        yaml.indent(mapping=2, sequence=4, offset=2)
        yaml.width = 4096
        return yaml

    def _read(self) -> str:
        try:
            return self.app.fs.read_text(self.source)
        except OSError as e:
            raise io_error(self.source, e, action="read") from e

    def _load(self, yaml: YAML) -> List[Any]:
        try:
            docs = list(yaml.load_all(self._read()))
        except YAMLError as e:
            raise ComponentError(
                ErrorKind.INVALID, f"parse {self.source}: {e}",
                path=self.source, name=self.name(False)) from e
        return [doc for doc in docs if doc is not None]

    def _document(self, docs: List[Any], options: ParamOptions) -> Any:
        index = options.index if options else 0
        if index < 0 or index >= len(docs):
            raise ComponentError(
                ErrorKind.INVALID,
                f"component {self.name(True)!r} has no document at index {index}",
                path=self.source, name=self.name(False))
        doc = docs[index]
        if not isinstance(doc, dict):
            raise ComponentError(
                ErrorKind.INVALID,
                f"document {index} of {self.name(True)!r} is not a mapping",
                path=self.source, name=self.name(False))
        return doc

    def _save(self, yaml: YAML, docs: List[Any]) -> None:
        stream = io.StringIO()
        if self.type_name == "json":
            # A JSON file holds exactly one document
            stream.write(json.dumps(docs[0], indent=2) + "\n")
        else:
            for i, doc in enumerate(docs):
                if i > 0:
                    stream.write("---\n")
                yaml.dump(doc, stream)

        try:
            self.app.fs.write_text(self.source, stream.getvalue())
        except OSError as e:
            raise io_error(self.source, e, action="write") from e
        logger.debug(f"Rewrote {self.source}")

    def objects(self, params_str: str = "", env_name: str = "") -> List[Dict[str, Any]]:
        """Static manifests render to their own documents."""
        return self._load(YAML(typ="safe"))

    def set_param(self, path: List[str], value: Any, options: ParamOptions = None) -> None:
        if not path:
            raise ComponentError(ErrorKind.INVALID, "parameter path is empty", name=self.name(False))

        yaml = self._round_trip_yaml()
        docs = self._load(yaml)
        node = self._document(docs, options)

        for key in path[:-1]:
            child = node.get(key)
            if child is None:
                child = CommentedMap()
                node[key] = child
            elif not isinstance(child, dict):
                raise ComponentError(
                    ErrorKind.INVALID,
                    f"parameter {'.'.join(path)!r} crosses non-mapping key {key!r}",
                    path=self.source, name=self.name(False))
            node = child

        node[path[-1]] = value
        self._save(yaml, docs)

    def delete_param(self, path: List[str], options: ParamOptions = None) -> None:
        if not path:
            raise ComponentError(ErrorKind.INVALID, "parameter path is empty", name=self.name(False))

        yaml = self._round_trip_yaml()
        docs = self._load(yaml)
        node = self._document(docs, options)

        for key in path[:-1]:
            node = node.get(key) if isinstance(node, dict) else None
            if node is None:
                break

        if not isinstance(node, dict) or path[-1] not in node:
            raise ComponentError(
                ErrorKind.NOT_FOUND,
                f"parameter {'.'.join(path)!r} not found in {self.name(True)!r}",
                path=self.source, name=self.name(False))

        del node[path[-1]]
        self._save(yaml, docs)

    def params(self, env_name: str = "") -> List[NamespaceParameter]:
        """
        Flattens every document into dotted leaf keys. Manifests carry no
        per-environment overrides, so a named environment is validated and
        then reports the same local values.
        """
        if env_name:
            self.app.environment(env_name)

        result = []
        for index, doc in enumerate(self._load(YAML(typ="safe"))):
            for key, value in _flatten(doc):
                result.append(NamespaceParameter(
                    component=self.name(False), index=str(index), key=key, value=value))
        return result

    def summarize(self) -> List[Summary]:
        summaries = []
        for index, doc in enumerate(self._load(YAML(typ="safe"))):
            doc = doc if isinstance(doc, dict) else {}
            metadata = doc.get("metadata") or {}
            summaries.append(Summary(
                component_name=self.name(False),
                index_str=str(index),
                index=index,
                type=self.type_name,
                api_version=str(doc.get("apiVersion") or ""),
                kind=str(doc.get("kind") or ""),
                name=str(metadata.get("name") or "") if isinstance(metadata, dict) else "",
            ))
        return summaries


class JsonnetComponent(Component):
    """A Jsonnet source. Evaluation is out of reach, so only naming works."""

    type_name = "jsonnet"

    def objects(self, params_str: str = "", env_name: str = "") -> List[Dict[str, Any]]:
        raise self._unsupported("evaluating objects")

    def set_param(self, path: List[str], value: Any, options: ParamOptions = None) -> None:
        raise self._unsupported("setting parameters")

    def delete_param(self, path: List[str], options: ParamOptions = None) -> None:
        raise self._unsupported("deleting parameters")

    def params(self, env_name: str = "") -> List[NamespaceParameter]:
        raise self._unsupported("listing parameters")

    def summarize(self) -> List[Summary]:
        return [Summary(
            component_name=self.name(False), index_str="*", index=0, type=self.type_name)]


COMPONENT_TYPES = {
    ".jsonnet": JsonnetComponent,
    ".yaml": YamlComponent,
    ".yml": YamlComponent,
    ".json": YamlComponent,
}


def trim_ext(file_name: str) -> str:
    """
    Drops everything from the last dot on. Unlike os.path.splitext, a
    dotfile such as '.gitignore' trims to the empty name.
    """
    dot = file_name.rfind(".")
    if dot < 0:
        return file_name
    return file_name[:dot]


def is_component_file(file_name: str) -> bool:
    return os.path.splitext(file_name)[1] in COMPONENT_TYPES


def make_component(app, namespace_path: str, source: str) -> Component:
    """Picks the variant for `source` by its extension."""
    ext = os.path.splitext(source)[1]
    component_cls = COMPONENT_TYPES.get(ext)
    if component_cls is None:
        raise ComponentError(
            ErrorKind.UNSUPPORTED, f"unsupported component file type {ext!r}", path=source)
    return component_cls(app, namespace_path, source)


def _flatten(node: Any, prefix: str = ""):
    """Yields (dotted_key, value) for every non-mapping leaf."""
    if isinstance(node, dict) and node:
        for key, value in node.items():
            child = f"{prefix}.{key}" if prefix else str(key)
            yield from _flatten(value, child)
    elif prefix:
        yield prefix, node

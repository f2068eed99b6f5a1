"""JSON Pointer-style addressing into surface data models.

Paths are ``/``-delimited with ``~1`` for ``/`` and ``~0`` for ``~``.
Empty segments are skipped, so ``""``, ``"/"`` and ``"//"`` all name the root.
Writes are copy-on-write: only the containers along the path are copied and
the original tree is never mutated.
"""

from typing import Any

from ..core.errors import InvalidDataModelPath
from ..protocol.values import JSONObject, JSONValue

ROOT = "/"
APPEND_TOKEN = "-"


def unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def is_absolute(path: str) -> bool:
    return path.startswith("/")


def parse(path: str) -> list[str]:
    """Split an absolute path into unescaped tokens."""
    return [unescape(token) for token in path.split("/") if token]


def build(tokens: list[str]) -> str:
    """Inverse of :func:`parse`."""
    return "/" + "/".join(escape(token) for token in tokens) if tokens else ROOT


def join(context_path: str, relative: str) -> str:
    """
    Compose a relative path onto an absolute context path.

    ``""`` and ``"."`` name the context itself. An absolute ``relative``
    ignores the context.
    """
    if is_absolute(relative):
        return relative
    base = context_path if is_absolute(context_path) else "/" + context_path
    if relative in ("", "."):
        return base
    return base.rstrip("/") + "/" + relative


def absolute(path: str, context_path: str | None = None) -> str:
    """
    Absolute form of a binding path.

    Without a context a relative path names one top-level key, matching
    how the resolver reads it.
    """
    if is_absolute(path):
        return path
    if context_path is None:
        return "/" + escape(path)
    return join(context_path, path)


def _index(token: str) -> int | None:
    if token.isascii() and token.isdigit():
        return int(token)
    return None


def get(document: JSONValue, path: str) -> JSONValue | None:
    """
    Walk ``document`` along an absolute path.

    Returns None when a segment is missing, indexes into a scalar, or is an
    out-of-range or non-numeric array index.
    """
    current: Any = document
    for token in parse(path):
        if isinstance(current, dict):
            if token not in current:
                return None
            current = current[token]
        elif isinstance(current, list):
            index = _index(token)
            if index is None or index >= len(current):
                return None
            current = current[index]
        else:
            return None
    return current


def set_value(document: JSONObject, path: str, value: JSONValue) -> JSONObject:
    """
    Return a copy of ``document`` with ``value`` written at ``path``.

    Missing intermediate containers are created as objects. A ``None`` value
    deletes the key or array element. Array segments accept an existing
    index, the array length, or ``-`` to append.

    Raises:
        InvalidDataModelPath: If the path crosses a scalar or a bad array index
    """
    tokens = parse(path)
    if not tokens:
        raise InvalidDataModelPath(path, "root must be replaced, not set")
    return _set(document, tokens, value, path)


def _set(node: Any, tokens: list[str], value: JSONValue, path: str) -> Any:
    token, rest = tokens[0], tokens[1:]

    if isinstance(node, dict):
        updated = dict(node)
        if not rest:
            if value is None:
                updated.pop(token, None)
            else:
                updated[token] = value
            return updated
        child = node.get(token)
        if child is None:
            if value is None:
                return node
            child = {}
        updated[token] = _set(child, rest, value, path)
        return updated

    if isinstance(node, list):
        index = len(node) if token == APPEND_TOKEN else _index(token)
        if index is None:
            raise InvalidDataModelPath(path, f"'{token}' is not an array index")
        updated_list = list(node)
        if not rest:
            if value is None:
                if index < len(node):
                    del updated_list[index]
                return updated_list
            if index < len(node):
                updated_list[index] = value
            elif index == len(node):
                updated_list.append(value)
            else:
                raise InvalidDataModelPath(path, f"index {index} out of range")
            return updated_list
        if index >= len(node):
            if value is None:
                return node
            raise InvalidDataModelPath(path, f"index {index} out of range")
        updated_list[index] = _set(node[index], rest, value, path)
        return updated_list

    raise InvalidDataModelPath(path, f"cannot descend into {type(node).__name__} at '{token}'")

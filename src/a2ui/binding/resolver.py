"""
Data Binding Resolver
Resolves dynamic values against a surface data model.

Resolution misses never raise. A path that is absent, crosses a scalar,
or lands on a value of the wrong kind resolves to the caller's default
(empty string, 0, False, empty list), and a half-populated data model
renders as blanks.
"""

from typing import Mapping

from ..core.logging_config import get_logger
from ..protocol.dynamic import (
    DynamicBoolean,
    DynamicNumber,
    DynamicString,
    DynamicStringList,
    DynamicValue,
)
from ..protocol.values import (
    JSONObject,
    JSONValue,
    as_bool,
    as_number,
    as_string,
    as_string_list,
)
from . import pointer

logger = get_logger(__name__)


class BindingResolver:
    """Stateless resolver shared by the store, the session and renderers."""

    def resolve_path(
        self,
        path: str,
        data_model: JSONObject,
        context_path: str | None = None,
    ) -> JSONValue | None:
        """
        Resolve a path to a value.

        Absolute paths walk the data model. A relative path is a direct
        top-level key lookup when there is no context, and is joined onto
        ``context_path`` when rendering inside a template instance.

        Returns:
            The value, or None when resolution fails
        """
        if pointer.is_absolute(path):
            return pointer.get(data_model, path)
        if context_path is None:
            return data_model.get(path)
        return pointer.get(data_model, pointer.join(context_path, path))

    def _lookup(
        self,
        path: str,
        data_model: JSONObject,
        context_path: str | None,
    ) -> JSONValue | None:
        value = self.resolve_path(path, data_model, context_path)
        if value is None:
            logger.debug("binding_miss", path=path, context_path=context_path)
        return value

    def resolve_string(
        self,
        value: DynamicString,
        data_model: JSONObject,
        context_path: str | None = None,
        default: str = "",
    ) -> str:
        if value.path is None:
            return value.literal
        resolved = as_string(self._lookup(value.path, data_model, context_path))
        return default if resolved is None else resolved

    def resolve_number(
        self,
        value: DynamicNumber,
        data_model: JSONObject,
        context_path: str | None = None,
        default: float = 0.0,
    ) -> float:
        if value.path is None:
            return float(value.literal)
        resolved = as_number(self._lookup(value.path, data_model, context_path))
        return default if resolved is None else resolved

    def resolve_boolean(
        self,
        value: DynamicBoolean,
        data_model: JSONObject,
        context_path: str | None = None,
        default: bool = False,
    ) -> bool:
        if value.path is None:
            return value.literal
        resolved = as_bool(self._lookup(value.path, data_model, context_path))
        return default if resolved is None else resolved

    def resolve_string_list(
        self,
        value: DynamicStringList,
        data_model: JSONObject,
        context_path: str | None = None,
        default: list[str] | None = None,
    ) -> list[str]:
        if value.path is None:
            return list(value.literal)
        resolved = as_string_list(self._lookup(value.path, data_model, context_path))
        if resolved is None:
            return list(default) if default is not None else []
        return resolved

    def resolve_value(
        self,
        value: DynamicValue,
        data_model: JSONObject,
        context_path: str | None = None,
    ) -> JSONValue:
        """Untyped binding: literal as-is, or the raw value at the path (None on miss)."""
        if value.path is None:
            return list(value.literal) if isinstance(value, DynamicStringList) else value.literal
        return self._lookup(value.path, data_model, context_path)

    def resolve_action_context(
        self,
        context: Mapping[str, DynamicValue] | None,
        data_model: JSONObject,
        context_path: str | None = None,
    ) -> dict[str, JSONValue]:
        """
        Resolve every entry of an action's event context.

        Callers pass one data-model snapshot so the action reflects a
        single point in time.
        """
        if not context:
            return {}
        return {
            key: self.resolve_value(binding, data_model, context_path)
            for key, binding in context.items()
        }

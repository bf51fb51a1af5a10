"""Utility functions related to json."""

from __future__ import annotations

import json
import math

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Union

from slsa_provenance.error import JsonError
from slsa_provenance.config import ProvenanceConfig

if TYPE_CHECKING:
    from typing import Any


JsonValue = Union[
    None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]
]
"""Any JSON value: the type of the opaque fields of a provenance document."""


provenance_config = ProvenanceConfig.load()


def json_type_name(value: Any) -> str:
    """Return the JSON type name of a decoded JSON value.

    :param value: a value as returned by :func:`json.loads`
    :return: one of ``null``, ``boolean``, ``number``, ``string``, ``array``,
        ``object``, or the Python type name for non JSON values.
    """
    if value is None:
        return "null"
    # bool is a subclass of int, check it first.
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float) and not math.isfinite(value):
        return "non-finite number"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def is_json_value(value: Any) -> bool:
    """Check that *value* is made only of JSON compatible Python objects.

    The value is walked without recursion so that any document accepted by
    :func:`json.loads` can be checked. NaN and infinities, which have no JSON
    representation, are rejected, as are self-referencing containers.
    """
    # Containers under visit are identified by id(), a container found twice
    # on the same branch is a cycle.
    visiting: set[int] = set()
    stack: list[tuple[Any, bool]] = [(value, False)]
    while stack:
        item, leaving = stack.pop()
        if leaving:
            visiting.discard(id(item))
        elif item is None or isinstance(item, (bool, int, str)):
            continue
        elif isinstance(item, float):
            if not math.isfinite(item):
                return False
        elif isinstance(item, (list, dict)):
            if id(item) in visiting:
                return False
            if isinstance(item, dict):
                if not all(isinstance(key, str) for key in item):
                    return False
                children = list(item.values())
            else:
                children = item
            visiting.add(id(item))
            stack.append((item, True))
            stack.extend((child, False) for child in children)
        else:
            return False
    return True


def copy_json_value(value: JsonValue) -> JsonValue:
    """Return an independent copy of an opaque JSON value.

    Like :func:`is_json_value`, the copy is made without recursion. Object
    keys keep their order.

    :raise TypeError: if *value* contains non JSON objects
    """
    if not is_json_value(value):
        raise TypeError(f"Invalid JSON value: {value!r}")

    result: list[JsonValue] = [None]
    stack: list[tuple[Any, Any, Any]] = [(result, 0, value)]
    while stack:
        parent, key, item = stack.pop()
        if isinstance(item, list):
            new_item: Any = [None] * len(item)
            stack.extend((new_item, index, child) for index, child in enumerate(item))
        elif isinstance(item, dict):
            new_item = dict.fromkeys(item)
            stack.extend((new_item, k, child) for k, child in item.items())
        else:
            new_item = item
        parent[key] = new_item
    return result[0]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON number")


def load_document(content: str | bytes | bytearray) -> Any:
    """Decode a JSON document.

    :param content: the JSON text, or its UTF-8 (or UTF-16/32) encoding
    :return: the decoded document
    :raise JsonError: if *content* is not valid JSON. This includes the
        ``NaN``, ``Infinity`` and ``-Infinity`` extensions of :mod:`json`
        and documents nested too deeply to be decoded.
    """
    try:
        return json.loads(content, parse_constant=_reject_constant)
    except RecursionError as err:
        raise JsonError(
            "invalid JSON document: maximum nesting depth exceeded",
            origin="load_document",
        ) from err
    except (ValueError, TypeError) as err:
        raise JsonError(
            f"invalid JSON document: {err}", origin="load_document"
        ) from err


def dump_document(
    obj: Any, indent: int | None = None, sort_keys: bool | None = None
) -> str:
    """Encode a JSON document.

    When not given, *indent* and *sort_keys* come from the ``[provenance]``
    configuration section. An indentation of 0 produces compact output.

    :raise ValueError: if *obj* contains NaN or an infinity
    """
    if indent is None:
        indent = provenance_config.json_indent
    if sort_keys is None:
        sort_keys = provenance_config.sort_keys
    return json.dumps(
        obj, indent=indent or None, sort_keys=sort_keys, allow_nan=False
    )


class JsonData(ABC):
    """An object to represent JSON data content."""

    @abstractmethod
    def as_dict(self) -> dict[str, object]:
        """Return the dict representation of this JSON data object."""
        ...

    def __eq__(self, other: object) -> bool:
        """Check if this JSON data is identical to *other*.

        :param other: The object to compare this JSON data with.

        :return: A :class:`bool` set to **True** if both JSON data are
            identical, **False** if they are not, or if *other* is not a
            :class:`JsonData` object of the same class.
        """  # noqa RST304
        if isinstance(other, self.__class__):
            return self.as_json(indent=0, sort_keys=True) == other.as_json(
                indent=0, sort_keys=True
            )
        return False

    def __hash__(self) -> int:
        return hash(self.as_json(indent=0, sort_keys=True))

    def as_json(self, indent: int | None = None, sort_keys: bool | None = None) -> str:
        """Return a JSON string representing this JSON data.

        .. seealso:: :func:`dump_document`
        """  # noqa RST304
        return dump_document(self.as_dict(), indent=indent, sort_keys=sort_keys)

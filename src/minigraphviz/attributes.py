"""
Attribute values and attribute list rendering.

Every node, connection, group and graph in a DOT document carries a set of
``key=value`` attributes. This module holds the value type used for those
attributes and the functions that turn an attribute mapping into DOT text.

Classes:
    ValueKind: Tag describing how an attribute value is rendered.
    AttributeValue: A renderable attribute value (number, quoted string, raw).

Functions:
    render_bracketed: Render attributes as an inline ``[a=1, b=2]`` list.
    render_statement_list: Render attributes as ``a = 1; b = 2`` statements.
    normalize_attributes: Coerce a plain mapping into an attribute mapping.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union


class ValueKind(Enum):
    """How an attribute value is emitted."""

    NUMBER = "number"
    STRING = "string"
    RAW = "raw"


# Characters escaped inside double-quoted strings
_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _quote(text: str) -> str:
    return '"' + "".join(_ESCAPES.get(char, char) for char in text) + '"'


@dataclass(frozen=True)
class AttributeValue:
    """
    A single attribute value.

    Values are compared structurally, including their kind, so
    ``AttributeValue.number(1.0)`` is not equal to
    ``AttributeValue.string("1.0")``.

    Attributes:
        kind: Whether the value is a number, a quoted string or raw text.
        value: The underlying float (numbers) or str (strings and raw text).
    """

    kind: ValueKind
    value: Union[float, str]

    @classmethod
    def number(cls, value: float) -> "AttributeValue":
        """Numeric value, emitted as plain decimal text."""
        return cls(ValueKind.NUMBER, float(value))

    @classmethod
    def string(cls, value: str) -> "AttributeValue":
        """String value, emitted between double quotes."""
        return cls(ValueKind.STRING, str(value))

    @classmethod
    def raw(cls, value: str) -> "AttributeValue":
        """Raw value, emitted verbatim (e.g. keywords such as ``LR``)."""
        return cls(ValueKind.RAW, str(value))

    @classmethod
    def coerce(cls, value: Any) -> "AttributeValue":
        """
        Convert a plain Python value into an AttributeValue.

        ``int`` and ``float`` become numbers and ``str`` becomes raw text,
        matching how literal values are written in DOT files. Existing
        AttributeValue instances are returned unchanged.

        Raises:
            TypeError: If the value cannot be represented as an attribute.
        """
        if isinstance(value, AttributeValue):
            return value
        if isinstance(value, bool):
            raise TypeError("Boolean attribute values are ambiguous; use raw('true')")
        if isinstance(value, (int, float)):
            return cls.number(value)
        if isinstance(value, str):
            return cls.raw(value)
        raise TypeError(
            f"Unsupported attribute value type: {type(value).__name__}"
        )

    @property
    def raw_value(self) -> str:
        """The value's text with no quoting or escaping applied."""
        if self.kind is ValueKind.NUMBER:
            return repr(self.value)
        return self.value

    def __str__(self) -> str:
        if self.kind is ValueKind.NUMBER:
            return repr(self.value)
        if self.kind is ValueKind.STRING:
            return _quote(self.value)
        return self.value


Attributes = Dict[str, AttributeValue]


def normalize_attributes(attributes: Optional[Mapping[str, Any]]) -> Attributes:
    """Return a new attribute dict with every value coerced to AttributeValue."""
    if not attributes:
        return {}
    return {key: AttributeValue.coerce(value) for key, value in attributes.items()}


def _attribute_pairs(
    attributes: Mapping[str, AttributeValue],
    defaults: Optional[Mapping[str, AttributeValue]],
    separator: str,
) -> List[str]:
    """
    Knock down default values and format the rest as sorted key/value pairs.

    A key is dropped when its value equals the value of the same key in
    ``defaults``.
    """
    reduced = dict(attributes)

    for key, value in (defaults or {}).items():
        if key in reduced and reduced[key] == value:
            del reduced[key]

    return [f"{key}{separator}{reduced[key]}" for key in sorted(reduced)]


def render_bracketed(
    attributes: Mapping[str, AttributeValue],
    defaults: Optional[Mapping[str, AttributeValue]] = None,
) -> str:
    """
    Render attributes as an inline DOT attribute list.

    Args:
        attributes: Attributes to render.
        defaults: Values that are omitted when an attribute matches them.

    Returns:
        ``[key1=value1, key2=value2]`` with keys sorted, or an empty string
        when nothing is left to render.
    """
    pairs = _attribute_pairs(attributes, defaults, "=")
    if not pairs:
        return ""
    return "[" + ", ".join(pairs) + "]"


def render_statement_list(
    attributes: Mapping[str, AttributeValue],
    defaults: Optional[Mapping[str, AttributeValue]] = None,
) -> str:
    """
    Render attributes as block-level statements on a single line.

    Returns:
        ``key1 = value1; key2 = value2`` with keys sorted, or an empty string.
    """
    return "; ".join(_attribute_pairs(attributes, defaults, " = "))

"""Identifier and file-name normalisation.

Every name transform in the generator goes through this module: file slugs
for models and API artifacts, camelCase identifiers for parameters, PascalCase
names for query-parameter interfaces and API classes, and normalised operation
ids. All functions are pure and deterministic.

**Rules:**

* :func:`to_file_slug` -- kebab-case for file names. ``HTTPServer`` becomes
  ``http-server`` and ``orderItem`` becomes ``order-item``.
* :func:`to_identifier_camel` -- strip ``-`` / ``_`` separators, upper-case the
  following character, lower-case the first character.
* :func:`to_identifier_pascal` -- :func:`to_identifier_camel` with the first
  character upper-cased.
"""

from __future__ import annotations

import re
from typing import Optional

from ngapigen.models import DEFAULT_TAG, HTTPMethod


# ---------------------------------------------------------------------------
# Case conversion
# ---------------------------------------------------------------------------

_LOWER_UPPER_RE = re.compile(r"([a-z])([A-Z])")
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_SEPARATOR_RE = re.compile(r"[-_]+(.?)")


def to_file_slug(name: str) -> str:
    """Convert *name* to the kebab-case slug used for file names.

    Example::

        >>> to_file_slug("HTTPServer")
        'http-server'
        >>> to_file_slug("orderItem")
        'order-item'
    """
    result = _LOWER_UPPER_RE.sub(r"\1-\2", name)
    result = _ACRONYM_RE.sub(r"\1-\2", result)
    return result.lower()


def to_identifier_camel(name: Optional[str]) -> Optional[str]:
    """Convert a snake_case or kebab-case name to camelCase.

    ``None`` and the empty string are returned unchanged.

    Example::

        >>> to_identifier_camel("course_id")
        'courseId'
        >>> to_identifier_camel("X-Request-Id")
        'xRequestId'
    """
    if not name:
        return name
    result = _SEPARATOR_RE.sub(lambda m: m.group(1).upper(), name)
    if not result:
        return result
    return result[0].lower() + result[1:]


def to_identifier_pascal(name: Optional[str]) -> Optional[str]:
    """Convert *name* to PascalCase (camelCase with an upper-case first letter)."""
    camel = to_identifier_camel(name)
    if not camel:
        return camel
    return camel[0].upper() + camel[1:]


_WORD_SPLIT_RE = re.compile(r"[^A-Za-z0-9]+")


def camelize(name: str) -> str:
    """Join the words of *name* into PascalCase.

    Words are split on any run of non-alphanumeric characters. The first
    letter of every word is upper-cased; the rest is kept as written.

    Example::

        >>> camelize("order items")
        'OrderItems'
        >>> camelize("petStore")
        'PetStore'
    """
    words = [w for w in _WORD_SPLIT_RE.split(name) if w]
    return "".join(w[0].upper() + w[1:] for w in words)


# ---------------------------------------------------------------------------
# Host naming hooks
# ---------------------------------------------------------------------------

_TAG_INVALID_RE = re.compile(r"[^\w\s-]")


def sanitize_tag(tag: Optional[str]) -> str:
    """Normalise a tag name into the key used for grouping and file naming.

    Example::

        >>> sanitize_tag("order items")
        'OrderItems'
        >>> sanitize_tag("2fa")
        'Class2fa'
    """
    cleaned = camelize(_TAG_INVALID_RE.sub("", tag or ""))
    if not cleaned:
        cleaned = camelize(DEFAULT_TAG)
    if cleaned[0].isdigit():
        cleaned = f"Class{cleaned}"
    return cleaned


def to_api_name(tag: str) -> str:
    """Return the generated service class name for *tag* (``OrdersApi``)."""
    return camelize(tag) + "Api"


def api_filename(tag: str) -> str:
    """Return the file slug shared by a tag's service and resource artifacts."""
    return to_file_slug(tag)


def model_filename(name: str) -> str:
    """Return the file slug for a model named *name*."""
    return to_file_slug(name)


_LEADING_UNDERSCORES_RE = re.compile(r"^_+")
_TRAILING_DIGITS_RE = re.compile(r"\d+$")


def to_operation_id(
    operation_id: Optional[str],
    method: HTTPMethod,
    path: str,
) -> str:
    """Return the normalised operation id used for method and interface names.

    Operations without an id get one derived from the verb and path
    (``GET /orders/{orderId}`` becomes ``getOrdersByOrderId``). The result is
    camel-cased, loses any leading underscores and trailing digits, and falls
    back to ``operation`` when nothing is left.
    """
    raw = operation_id or _derive_operation_id(method, path)
    name = to_identifier_camel(_WORD_SPLIT_RE.sub("_", raw)) or ""
    name = _LEADING_UNDERSCORES_RE.sub("", name)
    name = _TRAILING_DIGITS_RE.sub("", name)
    if not name.strip():
        return "operation"
    return name


def _derive_operation_id(method: HTTPMethod, path: str) -> str:
    parts = [method.value]
    for segment in path.split("/"):
        if not segment:
            continue
        if segment.startswith("{") and segment.endswith("}"):
            parts.append("By" + camelize(segment[1:-1]))
        else:
            parts.append(camelize(segment))
    return "".join(parts)

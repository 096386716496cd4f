"""Follow ``$ref`` JSON Reference pointers in OpenAPI specifications.

Parameters, request bodies and responses are commonly shared through
``components`` and referenced with ``{"$ref": "#/components/..."}``. The
extractor needs the referenced object to read a parameter's name and type,
but it needs the *name* of a referenced schema, because schemas become model
files. This module therefore resolves references one level at a time
(:func:`deref`) instead of inlining the whole document.

Only **internal** references (those starting with ``#/``) are supported.
External file or URL references raise
:class:`~ngapigen.exceptions.SpecParseError`.
"""

from __future__ import annotations

from typing import Any, Optional

from ngapigen.exceptions import SpecParseError


def resolve_ref(ref: str, root: dict[str, Any]) -> Any:
    """Resolve a single ``$ref`` string against the root spec.

    Parses JSON Pointer references like ``#/components/schemas/Pet`` and
    navigates the root dict to locate the referenced value. Handles
    RFC 6901 JSON Pointer escaping (``~0`` for ``~``, ``~1`` for ``/``).

    Args:
        ref: The ``$ref`` string (e.g., ``"#/components/parameters/Limit"``).
        root: The root spec dictionary to resolve against.

    Returns:
        The value found at the referenced path.

    Raises:
        SpecParseError: If the reference is external, or if any segment in
            the pointer path does not exist in the document.
    """
    if not ref.startswith("#/"):
        raise SpecParseError(
            f"External $ref not supported: {ref}. "
            "Only internal references (#/...) are handled."
        )

    current: Any = root
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': "
                    f"key '{segment}' not found at path"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': "
                    f"invalid array index '{segment}'"
                ) from exc
        else:
            raise SpecParseError(
                f"Cannot resolve $ref '{ref}': "
                f"cannot navigate into {type(current).__name__}"
            )

    return current


def deref(obj: Any, root: dict[str, Any]) -> Any:
    """Follow a chain of ``$ref`` pointers starting at *obj*.

    Nested values are left untouched. A reference cycle raises instead of
    looping.

    Args:
        obj: Any spec node. Non-reference nodes are returned as-is.
        root: The root spec dictionary.

    Returns:
        The first node in the chain that is not a ``$ref`` dict.

    Raises:
        SpecParseError: On an unresolvable or circular reference.
    """
    seen: set[str] = set()
    while isinstance(obj, dict) and "$ref" in obj:
        ref = obj["$ref"]
        if ref in seen:
            raise SpecParseError(f"Circular $ref chain at '{ref}'")
        seen.add(ref)
        obj = resolve_ref(ref, root)
    return obj


def ref_name(obj: Any) -> Optional[str]:
    """Return the last pointer segment of a ``$ref`` dict, or ``None``.

    Example::

        >>> ref_name({"$ref": "#/components/schemas/CourseCreate"})
        'CourseCreate'
    """
    if isinstance(obj, dict) and isinstance(obj.get("$ref"), str):
        return obj["$ref"].rsplit("/", 1)[-1].replace("~1", "/").replace("~0", "~")
    return None

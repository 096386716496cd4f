"""Summarise which kinds of operation every tag owns.

One pass over all operations in declaration order records, per sanitized tag,
whether the tag has a retrieval (``GET``) operation and whether it has any
mutation (every other verb). Operations without tags count towards
``default``. An operation with several tags contributes to each of them.

The result only depends on the set of operations visited, but it is built in
first-seen order so that anything iterating it produces reproducible output.
"""

from __future__ import annotations

from typing import Iterable

from ngapigen.generator.naming import sanitize_tag
from ngapigen.models import DEFAULT_TAG, APIOperation, HTTPMethod, TagUsage


def is_retrieval(method: HTTPMethod) -> bool:
    """Return ``True`` for the read verb (``GET``)."""
    return method == HTTPMethod.GET


def operation_tags(operation: APIOperation) -> list[str]:
    """Return the sanitized tags of *operation*, defaulting to ``default``."""
    tags = operation.tags or [DEFAULT_TAG]
    result: list[str] = []
    for tag in tags:
        sanitized = sanitize_tag(tag)
        if sanitized not in result:
            result.append(sanitized)
    return result


def analyze_tag_usage(operations: Iterable[APIOperation]) -> dict[str, TagUsage]:
    """Build the tag -> :class:`~ngapigen.models.TagUsage` mapping.

    Args:
        operations: Every operation of the spec, in declaration order.

    Returns:
        A dict keyed by sanitized tag name, in first-seen order.
    """
    usage_by_tag: dict[str, TagUsage] = {}
    for operation in operations:
        retrieval = is_retrieval(operation.method)
        for tag in operation_tags(operation):
            usage = usage_by_tag.setdefault(tag, TagUsage())
            if retrieval:
                usage.has_retrieval = True
            else:
                usage.has_mutation = True
    return usage_by_tag

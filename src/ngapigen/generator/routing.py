"""Decide which per-tag artifact files are left out of the output.

A tag's service file (``api/<slug>-api.ts``) only holds mutations, and its
resource file (``api/<slug>-resources.ts``) only holds ``httpResource``
accessors for GET operations. Emitting either one for a tag that has no
operations of that kind would produce an empty class, so
:func:`compute_skip_set` lists those files for the renderer to omit.

Resource files exist only when reactive resources are enabled and split
into their own files; otherwise no resource entry is ever added.
"""

from __future__ import annotations

from typing import Mapping

from ngapigen.generator.naming import api_filename, model_filename
from ngapigen.models import ArtifactKind, GeneratorOptions, TagUsage


def artifact_path(kind: ArtifactKind, name: str) -> str:
    """Return the output path of an artifact, relative to the output root.

    Example::

        >>> artifact_path(ArtifactKind.SERVICE, "Orders")
        'api/orders-api.ts'
        >>> artifact_path(ArtifactKind.MODEL, "CourseCreate")
        'models/course-create.ts'
    """
    slug = model_filename(name) if kind is ArtifactKind.MODEL else api_filename(name)
    return f"{kind.folder}/{slug}{kind.suffix}"


def resource_artifacts_enabled(options: GeneratorOptions) -> bool:
    """Return ``True`` when resource files are generated separately."""
    return options.use_reactive_resource and options.split_resource_artifacts


def should_skip_service(usage: TagUsage) -> bool:
    return not usage.has_mutation


def should_skip_resource(usage: TagUsage, options: GeneratorOptions) -> bool:
    return resource_artifacts_enabled(options) and not usage.has_retrieval


def compute_skip_set(
    usage_by_tag: Mapping[str, TagUsage],
    options: GeneratorOptions,
) -> frozenset[str]:
    """Compute the set of artifact paths the renderer must not emit.

    Args:
        usage_by_tag: Output of
            :func:`~ngapigen.generator.tag_usage.analyze_tag_usage`.
        options: The effective generator options.

    Returns:
        A frozenset of artifact paths as produced by :func:`artifact_path`.
    """
    skipped: set[str] = set()
    for tag, usage in usage_by_tag.items():
        if not (usage.has_retrieval or usage.has_mutation):
            continue
        if should_skip_service(usage):
            skipped.add(artifact_path(ArtifactKind.SERVICE, tag))
        if should_skip_resource(usage, options):
            skipped.add(artifact_path(ArtifactKind.RESOURCE, tag))
    return frozenset(skipped)

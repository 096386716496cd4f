"""Drive a generator through one generation run.

:func:`build_plan` plays the host call sequence against a
:class:`~ngapigen.generator.base.CodegenHooks` implementation and collects the
results into a :class:`~ngapigen.models.GenerationPlan`:

1. ``process_options`` -- which per-tag artifact kinds exist.
2. ``process_openapi`` -- tag usage and the skip set, from one scan of every
   operation.
3. ``post_process_models`` -- model mutability.
4. ``post_process_operations`` -- once per tag, in first-seen tag order.

Every step runs exactly once and in this order; the plan is not modified
afterwards.
"""

from __future__ import annotations

import logging
from typing import Optional

from ngapigen.generator.base import CodegenHooks
from ngapigen.generator.client import SignalClientGenerator
from ngapigen.generator.routing import artifact_path
from ngapigen.generator.tag_usage import operation_tags
from ngapigen.models import (
    APIOperation,
    Artifact,
    ArtifactKind,
    GenerationPlan,
    GeneratorOptions,
    ParsedSpec,
)

logger = logging.getLogger(__name__)


def group_operations_by_tag(operations: list[APIOperation]) -> dict[str, list[APIOperation]]:
    """Group operations under every sanitized tag they declare, in first-seen order."""
    groups: dict[str, list[APIOperation]] = {}
    for operation in operations:
        for tag in operation_tags(operation):
            groups.setdefault(tag, []).append(operation)
    return groups


def build_plan(
    spec: ParsedSpec,
    generator: Optional[CodegenHooks] = None,
    options: Optional[GeneratorOptions] = None,
) -> GenerationPlan:
    """Run the annotation pass over *spec* and return the generation plan.

    Args:
        spec: The parsed spec. Its operations and models are annotated in
            place.
        generator: The generator to drive. Defaults to a
            :class:`~ngapigen.generator.client.SignalClientGenerator` built
            from *options*.
        options: Options for the default generator. Ignored when
            *generator* is given.

    Returns:
        The :class:`~ngapigen.models.GenerationPlan` for the renderer.

    Example::

        raw = load_spec("openapi.yaml")
        spec = extract_spec(raw, validate_openapi_version(raw))
        plan = build_plan(spec, options=GeneratorOptions(readonly_output_models=False))
        for artifact in plan.emitted:
            print(artifact.path)
    """
    if generator is None:
        generator = SignalClientGenerator(options)

    api_kinds = generator.process_options()
    skip_set = generator.process_openapi(spec)
    models = generator.post_process_models(list(spec.models))

    bundles = [
        generator.post_process_operations(tag, operations)
        for tag, operations in group_operations_by_tag(spec.operations).items()
    ]

    artifacts: list[Artifact] = []
    for model in models:
        path = artifact_path(ArtifactKind.MODEL, model.name)
        artifacts.append(
            Artifact(kind=ArtifactKind.MODEL, path=path, source=model.name, skipped=path in skip_set)
        )
    for bundle in bundles:
        for kind in api_kinds:
            path = artifact_path(kind, bundle.tag)
            artifacts.append(
                Artifact(kind=kind, path=path, source=bundle.tag, skipped=path in skip_set)
            )

    logger.debug(
        "Planned %d artifact(s) for %d tag(s) and %d model(s)",
        len(artifacts),
        len(bundles),
        len(models),
    )

    return GenerationPlan(
        api_title=spec.info.title,
        api_version=spec.info.version,
        options=generator.options,
        models=models,
        bundles=bundles,
        tag_usage=getattr(generator, "tag_usage", {}),
        skip_set=skip_set,
        artifacts=artifacts,
    )

"""Angular client generator built on signals.

GET operations become ``httpResource`` accessors in a per-tag
``-resources.ts`` file, every other verb becomes a method on an injectable
service in ``-api.ts``, and output models get ``readonly`` properties.
"""

from __future__ import annotations

import logging
from typing import Optional

from ngapigen.generator import naming
from ngapigen.generator.base import CodegenHooks
from ngapigen.generator.model_annotator import annotate_models
from ngapigen.generator.operations import annotate_operations
from ngapigen.generator.routing import compute_skip_set, resource_artifacts_enabled
from ngapigen.generator.tag_usage import analyze_tag_usage
from ngapigen.models import (
    APIModel,
    APIOperation,
    ArtifactKind,
    HTTPMethod,
    OperationBundle,
    ParsedSpec,
    TagUsage,
)

logger = logging.getLogger(__name__)


class SignalClientGenerator(CodegenHooks):
    """Generator for Angular clients using ``httpResource`` and ``inject()``."""

    tag_usage: dict[str, TagUsage]

    @property
    def name(self) -> str:
        return "angular21"

    @property
    def help(self) -> str:
        return (
            "Generates Angular client code with httpResource for GET requests, "
            "the inject() function, and signal-based reactivity."
        )

    def process_options(self) -> list[ArtifactKind]:
        self.tag_usage = {}
        kinds = [ArtifactKind.SERVICE]
        if resource_artifacts_enabled(self.options):
            kinds.append(ArtifactKind.RESOURCE)
        logger.info(
            "%s generator initialized with: useHttpResource=%s, useInjectFunction=%s, "
            "separateResources=%s, readonlyModels=%s",
            self.name,
            self.options.use_reactive_resource,
            self.options.use_injected_dependency,
            self.options.split_resource_artifacts,
            self.options.readonly_output_models,
        )
        return kinds

    def process_openapi(self, spec: ParsedSpec) -> frozenset[str]:
        self.tag_usage = analyze_tag_usage(spec.operations)
        skip_set = compute_skip_set(self.tag_usage, self.options)
        logger.debug("Skipping %d artifact(s): %s", len(skip_set), sorted(skip_set))
        return skip_set

    def to_model_filename(self, name: str) -> str:
        return naming.model_filename(name)

    def to_api_filename(self, tag: str) -> str:
        return naming.api_filename(tag)

    def to_api_name(self, tag: str) -> str:
        return naming.to_api_name(tag)

    def to_operation_id(
        self, operation_id: Optional[str], method: HTTPMethod, path: str
    ) -> str:
        return naming.to_operation_id(operation_id, method, path)

    def post_process_models(self, models: list[APIModel]) -> list[APIModel]:
        return annotate_models(models, self.options)

    def post_process_operations(
        self, tag: str, operations: list[APIOperation]
    ) -> OperationBundle:
        for operation in operations:
            operation.nickname = self.to_operation_id(
                operation.operation_id, operation.method, operation.path
            )
        get_operations, mutation_operations = annotate_operations(operations, self.options)
        return OperationBundle(
            tag=tag,
            class_name=self.to_api_name(tag),
            file_slug=self.to_api_filename(tag),
            operations=list(operations),
            get_operations=get_operations,
            mutation_operations=mutation_operations,
        )

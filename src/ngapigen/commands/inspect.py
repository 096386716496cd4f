"""Read-only commands -- show what a generation run would produce.

``ngapigen plan`` lists every artifact with its emit/skip status and
``ngapigen tags`` shows the per-tag retrieval/mutation summary the skip
decisions are based on. Neither writes any file.
"""

from __future__ import annotations

from typing import Optional

import typer

from ngapigen.commands.common import (
    CONFIG_OPTION,
    DEFINE_OPTION,
    INJECT_OPTION,
    READONLY_OPTION,
    REACTIVE_OPTION,
    SPEC_ARGUMENT,
    SPLIT_OPTION,
    STRICT_OPTION,
    exit_on_error,
    load_plan,
)
from ngapigen.generator.routing import (
    artifact_path,
    resource_artifacts_enabled,
    should_skip_resource,
    should_skip_service,
)
from ngapigen.models import ArtifactKind
from ngapigen.output import print_json, print_table


def plan_command(
    spec: str = SPEC_ARGUMENT,
    config: Optional[str] = CONFIG_OPTION,
    define: Optional[list[str]] = DEFINE_OPTION,
    reactive_resource: Optional[bool] = REACTIVE_OPTION,
    injected_dependency: Optional[bool] = INJECT_OPTION,
    split_resources: Optional[bool] = SPLIT_OPTION,
    readonly_models: Optional[bool] = READONLY_OPTION,
    strict_paths: Optional[bool] = STRICT_OPTION,
    dump: bool = typer.Option(
        False, "--dump", help="Print the full annotated plan as JSON."
    ),
) -> None:
    """List the files a run would generate and which of them are skipped.

    Example::

        ngapigen plan openapi.yaml
        ngapigen --json plan openapi.yaml --no-split-resources
    """
    with exit_on_error():
        plan = load_plan(
            spec, config, define, reactive_resource, injected_dependency,
            split_resources, readonly_models, strict_paths,
        )

    if dump:
        print_json(plan.model_dump(mode="json"))
        return

    rows = [
        [a.path, a.kind.value, a.source, "skip" if a.skipped else "emit"]
        for a in plan.artifacts
    ]
    print_table(
        ["Artifact", "Kind", "Source", "Status"],
        rows,
        title=f"{plan.api_title} {plan.api_version} -- {len(plan.emitted)} of {len(rows)} emitted",
    )


def tags_command(
    spec: str = SPEC_ARGUMENT,
    config: Optional[str] = CONFIG_OPTION,
    define: Optional[list[str]] = DEFINE_OPTION,
    reactive_resource: Optional[bool] = REACTIVE_OPTION,
    split_resources: Optional[bool] = SPLIT_OPTION,
) -> None:
    """Show which tags have GET operations and which have mutations.

    Example::

        ngapigen tags openapi.yaml
    """
    with exit_on_error():
        plan = load_plan(
            spec, config, define, reactive_resource, None, split_resources, None, None
        )

    rows: list[list[str]] = []
    for tag, usage in plan.tag_usage.items():
        service = artifact_path(ArtifactKind.SERVICE, tag)
        resource = (
            artifact_path(ArtifactKind.RESOURCE, tag)
            if resource_artifacts_enabled(plan.options)
            else "-"
        )
        rows.append([
            tag,
            "yes" if usage.has_retrieval else "no",
            "yes" if usage.has_mutation else "no",
            f"{service} (skip)" if should_skip_service(usage) else service,
            f"{resource} (skip)" if should_skip_resource(usage, plan.options) else resource,
        ])

    print_table(
        ["Tag", "GET", "Mutations", "Service file", "Resource file"],
        rows,
        title=f"{plan.api_title} -- Tags ({len(rows)})",
    )

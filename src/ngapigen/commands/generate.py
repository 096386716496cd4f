"""``ngapigen generate`` -- render the plan into TypeScript sources."""

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
from ngapigen.output import debug, success
from ngapigen.render import render_plan


def generate_command(
    spec: str = SPEC_ARGUMENT,
    templates: str = typer.Option(
        ..., "--templates", "-t", help="Directory holding the *.ts.j2 templates."
    ),
    output_dir: str = typer.Option(
        ".", "--output", "-o", help="Root directory for generated sources."
    ),
    config: Optional[str] = CONFIG_OPTION,
    define: Optional[list[str]] = DEFINE_OPTION,
    reactive_resource: Optional[bool] = REACTIVE_OPTION,
    injected_dependency: Optional[bool] = INJECT_OPTION,
    split_resources: Optional[bool] = SPLIT_OPTION,
    readonly_models: Optional[bool] = READONLY_OPTION,
    strict_paths: Optional[bool] = STRICT_OPTION,
) -> None:
    """Generate the client sources for an OpenAPI document.

    Files listed in the plan's skip set are not written.

    Example::

        ngapigen generate openapi.yaml -t templates -o src/app/api
    """
    with exit_on_error():
        plan = load_plan(
            spec, config, define, reactive_resource, injected_dependency,
            split_resources, readonly_models, strict_paths,
        )
        written = render_plan(plan, templates, output_dir)

    for path in written:
        debug(f"wrote {path}")
    success(
        f"Generated {len(written)} file(s) in {output_dir}, "
        f"skipped {len(plan.skip_set)}."
    )

"""Option declarations and plan loading shared by the CLI commands."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import typer

from ngapigen.config import parse_defines, resolve_options
from ngapigen.exceptions import NgApiGenError
from ngapigen.generator import build_plan
from ngapigen.models import GenerationPlan
from ngapigen.output import debug, error
from ngapigen.parser import extract_spec, load_spec, validate_openapi_version


SPEC_ARGUMENT = typer.Argument(..., help="OpenAPI document: file path, URL, or '-' for stdin.")
CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="Config file (JSON/YAML). Defaults to ./ngapigen.{json,yaml,yml}."
)
DEFINE_OPTION = typer.Option(
    None, "--define", "-D", help="Additional property as key=value (repeatable)."
)
REACTIVE_OPTION = typer.Option(
    None,
    "--reactive-resource/--no-reactive-resource",
    help="Use httpResource for GET requests.",
)
INJECT_OPTION = typer.Option(
    None,
    "--injected-dependency/--no-injected-dependency",
    help="Use inject() instead of constructor injection.",
)
SPLIT_OPTION = typer.Option(
    None,
    "--split-resources/--no-split-resources",
    help="Generate separate resource files for GET operations.",
)
READONLY_OPTION = typer.Option(
    None,
    "--readonly-models/--no-readonly-models",
    help="Add readonly modifiers to output model properties.",
)
STRICT_OPTION = typer.Option(
    None,
    "--strict-paths/--lenient-paths",
    help="Fail when a path placeholder has no matching parameter.",
)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Turn :class:`~ngapigen.exceptions.NgApiGenError` into a clean exit."""
    try:
        yield
    except NgApiGenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def load_plan(
    spec: str,
    config: Optional[str],
    defines: Optional[list[str]],
    reactive_resource: Optional[bool],
    injected_dependency: Optional[bool],
    split_resources: Optional[bool],
    readonly_models: Optional[bool],
    strict_paths: Optional[bool],
) -> GenerationPlan:
    """Load *spec*, resolve options from every source, and build the plan.

    Raises:
        NgApiGenError: On any load, config, or annotation failure.
    """
    options = resolve_options(
        cli_overrides={
            "use_reactive_resource": reactive_resource,
            "use_injected_dependency": injected_dependency,
            "split_resource_artifacts": split_resources,
            "readonly_output_models": readonly_models,
            "strict_paths": strict_paths,
        },
        additional_properties=parse_defines(defines or []),
        config_file=config,
    )
    debug(f"Effective options: {options.model_dump()}")

    raw = load_spec(spec)
    parsed = extract_spec(raw, validate_openapi_version(raw))
    debug(f"Parsed {len(parsed.operations)} operation(s) and {len(parsed.models)} model(s)")
    return build_plan(parsed, options=options)

"""ngapigen -- Generate signal-based Angular API clients from OpenAPI 3.x specs.

The package parses an OpenAPI document, annotates every operation and model
with what the templates need (which file it belongs to, identifier names,
URL path templates, readonly flags), decides which per-tag files would be
empty and skips them, and renders the rest with Jinja2.

Typical workflow::

    ngapigen plan openapi.yaml                            # list the files
    ngapigen generate openapi.yaml -t templates -o src/app/api

Modules:
    app: Typer application and CLI entry point.
    commands: The plan, tags and generate commands.
    parser: OpenAPI loading, $ref resolution and extraction.
    generator: The annotation pass that builds a generation plan.
    models: Pydantic models shared across the package.
    config: Option resolution (flags, environment, config files).
    render: Jinja2 rendering of a generation plan.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "1.0.0"

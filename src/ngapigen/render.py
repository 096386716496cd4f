"""Render a :class:`~ngapigen.models.GenerationPlan` with Jinja2.

The templates are not part of this package; they live in a directory the
caller supplies, one file per artifact kind:

* ``model.ts.j2`` -- rendered once per model.
* ``api-service.ts.j2`` -- rendered once per tag with mutations.
* ``api-resource.ts.j2`` -- rendered once per tag with GET operations, when
  resource files are split out.

Artifacts in the plan's skip set are never rendered. Files are written with a
temp-file-then-rename so a failed run never leaves a half-written file
behind.

Template context for API artifacts: ``bundle``, ``operations``,
``getOperations``, ``mutationOperations``, ``hasGetOperations``,
``hasMutationOperations``, ``options`` and ``plan``. Model artifacts get
``model``, ``options`` and ``plan``. The ``camel``, ``pascal`` and ``slug``
filters expose :mod:`ngapigen.generator.naming`.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from ngapigen.exceptions import RenderError
from ngapigen.generator.naming import to_file_slug, to_identifier_camel, to_identifier_pascal
from ngapigen.models import Artifact, ArtifactKind, GenerationPlan

logger = logging.getLogger(__name__)


def render_plan(
    plan: GenerationPlan,
    template_dir: str | Path,
    output_dir: str | Path,
) -> list[Path]:
    """Render every non-skipped artifact of *plan* into *output_dir*.

    Args:
        plan: The plan produced by :func:`~ngapigen.generator.build_plan`.
        template_dir: Directory holding the ``*.ts.j2`` templates.
        output_dir: Root of the generated sources. ``api/`` and ``models/``
            are created below it as needed.

    Returns:
        The written file paths, in plan order.

    Raises:
        RenderError: If *template_dir* does not exist, a template is
            missing, or rendering fails.
    """
    template_path = Path(template_dir)
    if not template_path.is_dir():
        raise RenderError(f"Template directory not found: {template_path}")

    env = create_environment(template_path)
    output_root = Path(output_dir)
    written: list[Path] = []

    for artifact in plan.emitted:
        context = build_context(plan, artifact)
        target = output_root / artifact.path
        atomic_write(target, _render(env, artifact.kind.template, context))
        logger.debug("Wrote %s", target)
        written.append(target)

    for skipped in sorted(plan.skip_set):
        logger.debug("Skipped %s", skipped)

    return written


def create_environment(template_dir: Path) -> Environment:
    """Create the Jinja2 environment for client templates.

    Generated TypeScript is never HTML-escaped. Undefined variables raise so
    that a template typo fails the run instead of emitting broken code.
    """
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml"), default_for_string=False),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["camel"] = to_identifier_camel
    env.filters["pascal"] = to_identifier_pascal
    env.filters["slug"] = to_file_slug
    return env


def build_context(plan: GenerationPlan, artifact: Artifact) -> dict[str, Any]:
    """Assemble the template variables for one artifact."""
    context: dict[str, Any] = {"options": plan.options, "plan": plan}

    if artifact.kind is ArtifactKind.MODEL:
        context["model"] = _find(plan.models, "name", artifact.source)
        return context

    bundle = _find(plan.bundles, "tag", artifact.source)
    context.update(
        bundle=bundle,
        operations=bundle.operations,
        getOperations=bundle.get_operations,
        mutationOperations=bundle.mutation_operations,
        hasGetOperations=bundle.has_get_operations,
        hasMutationOperations=bundle.has_mutation_operations,
    )
    return context


def _find(items: list[Any], attr: str, value: str) -> Any:
    for item in items:
        if getattr(item, attr) == value:
            return item
    raise RenderError(f"Plan has no entry with {attr}={value!r}")


def _render(env: Environment, template_name: str, context: dict[str, Any]) -> str:
    try:
        return env.get_template(template_name).render(**context)
    except TemplateNotFound as exc:
        raise RenderError(f"Template not found: {exc.name}") from exc
    except TemplateError as exc:
        raise RenderError(f"Failed to render {template_name}: {exc}") from exc


def atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* through a temp file in the same directory.

    On success the temp file is renamed over *path*; on any failure it is
    removed and the error propagates.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Optional[str] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as fh:
            tmp_path = fh.name
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise

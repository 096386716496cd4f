"""Build interpolable URL path templates from raw OpenAPI paths.

A raw path such as ``/courses/{courseId}/files/{fileName}`` is rewritten into a
TypeScript template-literal body such as
``/courses/${courseId}/files/${fileNamePath}``. Two dialects exist:

* :attr:`PathDialect.PLAIN` -- imperative service methods. Numeric parameters
  are referenced by their identifier, everything else by ``<name>Path`` (the
  call site encodes it into a local first).
* :attr:`PathDialect.VALUE` -- ``httpResource`` accessor bodies, where the
  parameter may be a signal. Numeric parameters are referenced as
  ``<name>Value``; non-numeric ones use ``<name>Path`` as above.

**Placeholder grammar** recognised by :func:`rewrite_placeholders`:

* ``{name}`` -- an OpenAPI path-template placeholder.
* ``${this.configuration.encodeParam({... value: name ...})}`` -- the
  pre-encoded form emitted by the Angular client's default path encoder. HTML
  entities ``&quot;`` and ``&#39;`` are unescaped before matching.

Every match is replaced with ``${<variable>}``.
"""

from __future__ import annotations

import enum
import logging
import re
from typing import Callable, Optional, Sequence

from ngapigen.exceptions import StructuralInconsistencyError
from ngapigen.generator.naming import to_identifier_camel
from ngapigen.models import APIParameter

logger = logging.getLogger(__name__)


class PathDialect(str, enum.Enum):
    """Parameter-substitution convention for a path template."""

    PLAIN = "plain"
    VALUE = "value"


_PLACEHOLDER_RE = re.compile(
    r"(?P<encoded>\$\{this\.configuration\.encodeParam\("
    r"[^)]*?value: (?P<value>[^,}]+)[^)]*\)\})"
    r"|(?<!\$)\{(?P<name>[^{}/]+)\}"
)

_HTML_ENTITIES = (("&quot;", '"'), ("&#39;", "'"))


def unescape_html_entities(value: str) -> str:
    """Undo the HTML escaping the renderer applies to quotes."""
    for entity, char in _HTML_ENTITIES:
        value = value.replace(entity, char)
    return value


def replacement_variable(param: APIParameter, dialect: PathDialect) -> str:
    """Return the variable a path template references for *param*.

    Example::

        >>> p = APIParameter(name="courseId", location="path", ts_name="courseId", is_numeric=True)
        >>> replacement_variable(p, PathDialect.VALUE)
        'courseIdValue'
    """
    base = param.ts_name or to_identifier_camel(param.name) or param.name
    if not param.is_numeric:
        return f"{base}Path"
    if dialect is PathDialect.VALUE:
        return f"{base}Value"
    return base


def rewrite_placeholders(
    raw_path: str,
    resolve: Callable[[str, bool], str],
) -> str:
    """Rewrite every recognised placeholder in *raw_path* to ``${...}``.

    Args:
        raw_path: The path to rewrite. HTML entities are unescaped first.
        resolve: Called with ``(variable, encoded)`` for every match, where
            *variable* is the placeholder name and *encoded* is ``True`` for
            the ``encodeParam`` form. Returns the replacement variable name.

    Returns:
        The rewritten path.
    """

    def _substitute(match: re.Match[str]) -> str:
        if match.group("encoded"):
            variable = match.group("value").strip()
            return "${" + resolve(variable, True) + "}"
        return "${" + resolve(match.group("name").strip(), False) + "}"

    return _PLACEHOLDER_RE.sub(_substitute, unescape_html_entities(raw_path))


def build_path_template(
    raw_path: Optional[str],
    path_params: Sequence[APIParameter],
    dialect: PathDialect,
    strict: bool = False,
) -> Optional[str]:
    """Synthesize the path template for one operation in one dialect.

    Placeholders are matched against *path_params* by raw name. The encoded
    form names the generated identifier, so it is also matched by
    ``ts_name``. *path_params* is only read.

    Args:
        raw_path: The operation's raw path, or ``None``.
        path_params: The operation's path parameters, already annotated with
            ``ts_name`` and ``is_numeric``.
        dialect: Which substitution convention to apply.
        strict: Raise instead of degrading when a placeholder has no
            matching parameter.

    Returns:
        The template, or ``None`` when *raw_path* is ``None``.

    Raises:
        StructuralInconsistencyError: If *strict* is set and a placeholder
            cannot be resolved.
    """
    if raw_path is None:
        return None

    by_name: dict[str, str] = {}
    by_identifier: dict[str, str] = {}
    for param in path_params:
        variable = replacement_variable(param, dialect)
        by_name.setdefault(param.name, variable)
        if param.ts_name:
            by_identifier.setdefault(param.ts_name, variable)

    def _resolve(variable: str, encoded: bool) -> str:
        primary, secondary = (by_identifier, by_name) if encoded else (by_name, by_identifier)
        if variable in primary:
            return primary[variable]
        if variable in secondary:
            return secondary[variable]
        if strict:
            raise StructuralInconsistencyError(
                f"Path placeholder '{variable}' in '{raw_path}' has no matching parameter",
                path=raw_path,
                placeholder=variable,
            )
        logger.warning(
            "Path placeholder '%s' in '%s' has no matching parameter; "
            "copying the name through",
            variable,
            raw_path,
        )
        return variable

    return rewrite_placeholders(raw_path, _resolve)

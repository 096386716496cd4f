"""Read an OpenAPI document into a plain dict.

Sources are a local path, an ``http(s)://`` URL, or ``-`` for stdin. Content
is parsed as JSON when it looks like JSON (by extension, content type, or a
leading ``{``) and as YAML otherwise; JSON is a subset of YAML, so the YAML
parser is the fallback for everything.

:func:`validate_openapi_version` then checks that the document is OpenAPI 3.x
before :func:`~ngapigen.parser.extractor.extract_spec` walks it.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from ngapigen.exceptions import SpecParseError

_JSON_SUFFIXES = frozenset({".json"})
_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def load_spec(source: str) -> dict[str, Any]:
    """Load an OpenAPI document from a path, URL, or stdin (``-``).

    Args:
        source: Where to read the document from.

    Returns:
        The document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be read or does not hold a
            JSON/YAML object.
    """
    if source == "-":
        text, fmt = sys.stdin.read(), ""
        label = "stdin"
    elif source.startswith(("http://", "https://")):
        text, fmt = _fetch(source)
        label = source
    else:
        text, fmt = _read_file(source)
        label = source

    if not text.strip():
        raise SpecParseError(f"OpenAPI document is empty: {label}")
    return _parse(text, fmt, label)


def _fetch(url: str) -> tuple[str, str]:
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    fmt = "json" if "json" in content_type else "yaml" if "yaml" in content_type else ""
    return response.text, fmt


def _read_file(path: str) -> tuple[str, str]:
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    suffix = file_path.suffix.lower()
    if suffix in _JSON_SUFFIXES:
        return text, "json"
    if suffix in _YAML_SUFFIXES:
        return text, "yaml"
    return text, ""


def _parse(text: str, fmt: str, label: str) -> dict[str, Any]:
    """Parse *text* as JSON or YAML and check that the result is an object."""
    if fmt == "json" or (not fmt and text.lstrip().startswith("{")):
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            if fmt == "json":
                raise SpecParseError(f"Invalid JSON in {label}: {exc}") from exc
            document = _parse_yaml(text, label)
    else:
        document = _parse_yaml(text, label)

    if not isinstance(document, dict):
        kind = type(document).__name__ if document is not None else "empty document"
        raise SpecParseError(f"{label} must hold a JSON/YAML object (got {kind})")
    return document


def _parse_yaml(text: str, label: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SpecParseError(f"Invalid YAML in {label}: {exc}") from exc


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Return the document's OpenAPI version, rejecting anything but 3.x.

    Raises:
        SpecParseError: For Swagger 2.x, a missing ``openapi`` field, or a
            major version other than 3.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} is not supported; convert the document "
            "to OpenAPI 3.x first"
        )

    version = spec.get("openapi")
    if version is None:
        raise SpecParseError("Missing 'openapi' field. Is this an OpenAPI 3.x document?")

    version_str = str(version)
    if not version_str.startswith("3."):
        raise SpecParseError(f"Unsupported OpenAPI version: {version_str}")
    return version_str

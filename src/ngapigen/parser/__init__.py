"""OpenAPI spec parser -- load a document and extract operations and models.

Typical usage::

    from ngapigen.parser import extract_spec, load_spec, validate_openapi_version

    raw = load_spec("openapi.yaml")
    version = validate_openapi_version(raw)
    parsed = extract_spec(raw, version)

Sub-modules:

* :mod:`~ngapigen.parser.loader` -- I/O (file, URL, stdin), JSON/YAML
  parsing, and the OpenAPI version check.
* :mod:`~ngapigen.parser.resolver` -- One-level ``$ref`` resolution.
* :mod:`~ngapigen.parser.extractor` -- Builds the
  :class:`~ngapigen.models.ParsedSpec`.
"""

from ngapigen.parser.extractor import extract_spec
from ngapigen.parser.loader import load_spec, validate_openapi_version

__all__ = ["load_spec", "validate_openapi_version", "extract_spec"]

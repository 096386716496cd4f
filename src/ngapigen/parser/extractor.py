"""Extract operations and models from an OpenAPI document.

This module walks a raw OpenAPI dict and builds a
:class:`~ngapigen.models.ParsedSpec`: every operation (one per path + verb),
its parameters, the names of the schemas it sends and receives, and every
component schema as a model.

The single public entry point is :func:`extract_spec`. Traversal order is
fixed: paths in document order, and within a path item the verbs in
:class:`~ngapigen.models.HTTPMethod` order. Everything downstream relies on
that order for reproducible output.

Parameter merging follows the OpenAPI specification: path-level parameters
provide defaults, and operation-level parameters override them when they share
the same ``name`` and ``in`` values.

Missing optional fields get documented defaults instead of errors: operations
without tags are tagged ``default``, and parameters without a schema type are
treated as strings.
"""

from __future__ import annotations

from typing import Any, Optional

from ngapigen.models import (
    DEFAULT_TAG,
    APIInfo,
    APIModel,
    APIOperation,
    APIParameter,
    HTTPMethod,
    ModelProperty,
    ParameterLocation,
    ParsedSpec,
)
from ngapigen.parser.resolver import deref, ref_name


def extract_spec(raw_spec: dict[str, Any], openapi_version: str) -> ParsedSpec:
    """Extract a :class:`~ngapigen.models.ParsedSpec` from a raw OpenAPI dict.

    Args:
        raw_spec: The document as returned by
            :func:`~ngapigen.parser.loader.load_spec`.
        openapi_version: The validated version string, as returned by
            :func:`~ngapigen.parser.loader.validate_openapi_version`.

    Returns:
        The parsed spec with operations and models in document order.

    Raises:
        SpecParseError: If a ``$ref`` cannot be resolved.

    Example::

        raw = load_spec("openapi.yaml")
        parsed = extract_spec(raw, validate_openapi_version(raw))
        for op in parsed.operations:
            print(op.method.value.upper(), op.path, op.tags)
    """
    info = raw_spec.get("info") or {}
    return ParsedSpec(
        info=APIInfo(
            title=str(info.get("title", "Untitled API")),
            version=str(info.get("version", "0.0.0")),
            description=info.get("description"),
        ),
        operations=_extract_operations(raw_spec),
        models=_extract_models(raw_spec),
        openapi_version=openapi_version,
    )


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def _extract_operations(spec: dict[str, Any]) -> list[APIOperation]:
    """Extract one :class:`~ngapigen.models.APIOperation` per path + verb."""
    operations: list[APIOperation] = []

    for path, path_item in (spec.get("paths") or {}).items():
        path_item = deref(path_item, spec)
        if not isinstance(path_item, dict):
            continue

        path_params = path_item.get("parameters") or []

        for method in HTTPMethod:
            operation = path_item.get(method.value)
            if not isinstance(operation, dict):
                continue

            merged = _merge_parameters(
                [deref(p, spec) for p in path_params],
                [deref(p, spec) for p in operation.get("parameters") or []],
            )

            operations.append(
                APIOperation(
                    path=path,
                    method=method,
                    operation_id=_optional_str(operation.get("operationId")),
                    summary=operation.get("summary"),
                    description=operation.get("description"),
                    tags=[str(tag) for tag in operation.get("tags") or [DEFAULT_TAG]],
                    parameters=_extract_parameters(merged, spec),
                    request_schema=_request_schema(operation.get("requestBody"), spec),
                    response_schema=_response_schema(operation.get("responses"), spec),
                    deprecated=bool(operation.get("deprecated", False)),
                )
            )

    return operations


def _merge_parameters(
    path_params: list[dict[str, Any]],
    op_params: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    Path-level entries come first, minus those redeclared by the operation
    under the same ``(name, in)`` key.
    """
    overridden = {(str(p.get("name", "")), p.get("in", "")) for p in op_params}
    merged = [
        p for p in path_params
        if (str(p.get("name", "")), p.get("in", "")) not in overridden
    ]
    merged.extend(op_params)
    return merged


def _extract_parameters(
    params_list: list[dict[str, Any]],
    spec: dict[str, Any],
) -> list[APIParameter]:
    """Convert raw parameter dicts into :class:`~ngapigen.models.APIParameter` models.

    Parameters with an unrecognised ``in`` value are skipped. Path parameters
    are always required.
    """
    parameters: list[APIParameter] = []

    for param in params_list:
        if not isinstance(param, dict):
            continue
        try:
            location = ParameterLocation(param.get("in", "query"))
        except ValueError:
            continue

        raw_schema = param.get("schema")
        schema = deref(raw_schema, spec) if raw_schema is not None else {}
        schema_type = _schema_type(schema)

        parameters.append(
            APIParameter(
                name=str(param.get("name", "")),
                location=location,
                required=location == ParameterLocation.PATH or bool(param.get("required", False)),
                description=param.get("description"),
                schema_type=schema_type,
                schema_format=schema.get("format") if isinstance(schema, dict) else None,
                data_type=ref_name(raw_schema) or schema_type,
                is_integer=schema_type == "integer",
                is_number=schema_type == "number",
            )
        )

    return parameters


def _schema_type(schema: Any) -> Optional[str]:
    """Return the type of *schema*, picking the first non-null entry of a 3.1 type array."""
    if not isinstance(schema, dict):
        return None
    type_value = schema.get("type")
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        return non_null[0] if non_null else None
    if type_value is None and "properties" in schema:
        return "object"
    return type_value


def _content_schema_name(container: Any, spec: dict[str, Any]) -> Optional[str]:
    """Return the model name referenced by the first media type of a body/response."""
    container = deref(container, spec)
    if not isinstance(container, dict):
        return None
    for media in (container.get("content") or {}).values():
        if not isinstance(media, dict) or "schema" not in media:
            continue
        schema = media["schema"]
        name = ref_name(schema)
        if name is None and isinstance(schema, dict):
            name = ref_name(schema.get("items"))
        return name
    return None


def _request_schema(body: Any, spec: dict[str, Any]) -> Optional[str]:
    if body is None:
        return None
    return _content_schema_name(body, spec)


def _response_schema(responses: Any, spec: dict[str, Any]) -> Optional[str]:
    """Return the model of the first 2xx response, falling back to ``default``."""
    if not isinstance(responses, dict):
        return None
    codes = [str(code) for code in responses]
    success = [code for code in codes if code.startswith("2")]
    for code in success or (["default"] if "default" in codes else []):
        raw = responses.get(code)
        if raw is None:
            raw = responses.get(int(code)) if code.isdigit() else None
        name = _content_schema_name(raw, spec)
        if name:
            return name
    return None


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


def _extract_models(spec: dict[str, Any]) -> list[APIModel]:
    """Build one :class:`~ngapigen.models.APIModel` per ``components.schemas`` entry."""
    schemas = (spec.get("components") or {}).get("schemas") or {}
    models: list[APIModel] = []
    for name, raw_schema in schemas.items():
        schema = deref(raw_schema, spec)
        if not isinstance(schema, dict):
            continue
        models.append(
            APIModel(
                name=str(name),
                description=schema.get("description"),
                properties=_extract_properties(schema, spec),
            )
        )
    return models


def _extract_properties(schema: dict[str, Any], spec: dict[str, Any]) -> list[ModelProperty]:
    """Collect properties in declaration order, flattening ``allOf`` parts."""
    collected: dict[str, ModelProperty] = {}
    parts = [deref(part, spec) for part in schema.get("allOf") or []] + [schema]

    for part in parts:
        if not isinstance(part, dict):
            continue
        required = {str(item) for item in part.get("required") or []}
        for key, raw_prop in (part.get("properties") or {}).items():
            prop_name = str(key)
            prop = deref(raw_prop, spec)
            prop_type = _schema_type(prop)
            collected[prop_name] = ModelProperty(
                name=prop_name,
                schema_type=prop_type,
                data_type=ref_name(raw_prop) or _items_type(prop) or prop_type,
                required=prop_name in required or (
                    prop_name in collected and collected[prop_name].required
                ),
                description=prop.get("description") if isinstance(prop, dict) else None,
            )

    return list(collected.values())


def _items_type(schema: Any) -> Optional[str]:
    if not isinstance(schema, dict) or _schema_type(schema) != "array":
        return None
    items = schema.get("items")
    name = ref_name(items) or _schema_type(items)
    return f"{name}[]" if name else None


def _optional_str(value: Any) -> Optional[str]:
    """YAML reads unquoted scalars such as ``404`` as numbers."""
    return None if value is None else str(value)

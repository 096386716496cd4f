"""Annotate operations for the renderer.

For every operation this module decides the emission strategy (``httpResource``
accessor for GET, injected-service method for everything else), normalises
parameter identifiers, names the query-parameter interface, and attaches both
path-template dialects. :func:`annotate_operations` then buckets a tag's
operations into retrievals and mutations.

Missing optional information never raises: operations without a type on a
path parameter treat it as non-numeric, and operations without an id get one
derived from their verb and path.
"""

from __future__ import annotations

from typing import Sequence

from ngapigen.generator.naming import (
    to_identifier_camel,
    to_identifier_pascal,
    to_operation_id,
)
from ngapigen.generator.path_template import PathDialect, build_path_template
from ngapigen.generator.tag_usage import is_retrieval
from ngapigen.models import APIOperation, APIParameter, GeneratorOptions

QUERY_PARAMS_SUFFIX = "Params"

_NUMERIC_TYPES = frozenset({"number", "integer"})


def is_numeric_param(param: APIParameter) -> bool:
    """Return ``True`` when *param* is an integer or number.

    Checks the explicit type flags first, then the schema and data type names.
    """
    if param.is_integer or param.is_number:
        return True
    return param.schema_type in _NUMERIC_TYPES or param.data_type in _NUMERIC_TYPES


def annotate_path_params(operation: APIOperation) -> None:
    for param in operation.path_params:
        param.ts_name = to_identifier_camel(param.name)
        param.is_numeric = is_numeric_param(param)


def annotate_query_params(operation: APIOperation) -> None:
    query_params = operation.query_params
    operation.has_query_params = bool(query_params)
    if not query_params:
        operation.query_params_interface_name = None
        return
    operation.query_params_interface_name = (
        to_identifier_pascal(operation.nickname) + QUERY_PARAMS_SUFFIX
    )
    for param in query_params:
        param.ts_name = to_identifier_camel(param.name)


def annotate_operation(operation: APIOperation, options: GeneratorOptions) -> APIOperation:
    """Decorate a single operation in place and return it.

    Steps, in order:

    1. Classify the verb and record the emission strategy.
    2. Name and type-check path parameters.
    3. Name the query-parameter interface and its members.
    4. Build the plain and value path templates; a non-empty plain template
       becomes :attr:`~ngapigen.models.APIOperation.canonical_path`.

    Args:
        operation: The operation to annotate.
        options: The effective generator options.

    Returns:
        The same *operation* instance.

    Raises:
        StructuralInconsistencyError: Only when ``options.strict_paths`` is
            set and the path references an undeclared parameter.
    """
    if not operation.nickname:
        operation.nickname = to_operation_id(
            operation.operation_id, operation.method, operation.path
        )

    retrieval = is_retrieval(operation.method)
    operation.is_retrieval = retrieval
    operation.is_mutation = not retrieval
    operation.uses_resource_pattern = retrieval and options.use_reactive_resource
    operation.uses_injected_dependency = options.use_injected_dependency

    annotate_path_params(operation)
    annotate_query_params(operation)

    path_params = operation.path_params
    plain = build_path_template(
        operation.path, path_params, PathDialect.PLAIN, strict=options.strict_paths
    )
    value = build_path_template(
        operation.path, path_params, PathDialect.VALUE, strict=options.strict_paths
    )
    operation.plain_path_template = plain
    operation.value_path_template = value
    operation.canonical_path = plain if plain and plain.strip() else operation.path
    return operation


def annotate_operations(
    operations: Sequence[APIOperation],
    options: GeneratorOptions,
) -> tuple[list[APIOperation], list[APIOperation]]:
    """Annotate every operation and split them into retrieval and mutation buckets.

    Relative order is preserved within each bucket.

    Returns:
        ``(get_operations, mutation_operations)``.
    """
    get_operations: list[APIOperation] = []
    mutation_operations: list[APIOperation] = []
    for operation in operations:
        annotate_operation(operation, options)
        if operation.is_retrieval:
            get_operations.append(operation)
        else:
            mutation_operations.append(operation)
    return get_operations, mutation_operations

"""Canonical Pydantic models shared across all ngapigen modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration** -- :class:`GeneratorOptions`, resolved by
:mod:`ngapigen.config` from CLI flags, environment, additional properties, and
project config files.

**Parser output models** -- produced by the OpenAPI spec parser and annotated
in place by the generator pass:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`APIParameter`,
    :class:`APIOperation`, :class:`ModelProperty`, :class:`APIModel`,
    :class:`APIInfo`, and :class:`ParsedSpec`.

**Generation output models** -- built by :func:`~ngapigen.generator.build_plan`
and handed to the renderer:
    :class:`TagUsage`, :class:`OperationBundle`, :class:`ArtifactKind`,
    :class:`Artifact`, and :class:`GenerationPlan`.

Annotation fields on the parser models default to neutral values and are
filled by the generator pass. They are plain attributes (no assignment
validation) so the pass can decorate descriptors in place.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_TAG = "default"
"""Tag assigned to operations that declare none."""


# --- Configuration ---


class GeneratorOptions(BaseModel):
    """Flags consumed by the annotators.

    Every flag is independently applicable; no combination is rejected.

    See Also:
        :func:`~ngapigen.config.resolve_options`: Precedence chain that
        produces the effective instance.
    """

    model_config = ConfigDict(populate_by_name=True)

    use_reactive_resource: bool = Field(
        default=True,
        alias="useHttpResource",
        description="Emit GET operations as signal-based httpResource accessors",
    )
    use_injected_dependency: bool = Field(
        default=True,
        alias="useInjectFunction",
        description="Use inject() instead of constructor injection",
    )
    split_resource_artifacts: bool = Field(
        default=True,
        alias="separateResources",
        description="Place GET resources in their own -resources.ts file",
    )
    readonly_output_models: bool = Field(
        default=True,
        alias="readonlyModels",
        description="Add readonly modifiers to output model properties",
    )
    strict_paths: bool = Field(
        default=False,
        alias="strictPaths",
        description="Fail instead of degrading on unresolved path placeholders",
    )


# --- Parser Output Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI 3.x path-item objects.

    Declaration order is the traversal order within a path item.
    """

    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"
    HEAD = "head"
    OPTIONS = "options"
    TRACE = "trace"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"


class APIParameter(BaseModel):
    """A single parameter extracted from an OpenAPI operation.

    ``is_integer`` / ``is_number`` mirror the schema type; ``data_type`` holds
    the referenced model name when the schema is a ``$ref``.
    """

    name: str
    location: ParameterLocation
    required: bool = False
    description: Optional[str] = None
    schema_type: Optional[str] = None
    schema_format: Optional[str] = None
    data_type: Optional[str] = None
    is_integer: bool = False
    is_number: bool = False

    # Set by the generator pass.
    ts_name: Optional[str] = None
    is_numeric: bool = False


class APIOperation(BaseModel):
    """A single parsed API operation (one URL path + HTTP method pair)."""

    path: str
    method: HTTPMethod
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=lambda: [DEFAULT_TAG])
    parameters: list[APIParameter] = Field(default_factory=list)
    request_schema: Optional[str] = None
    response_schema: Optional[str] = None
    deprecated: bool = False

    # Set by the generator pass.
    nickname: Optional[str] = None
    is_retrieval: bool = False
    is_mutation: bool = False
    uses_resource_pattern: bool = False
    uses_injected_dependency: bool = False
    has_query_params: bool = False
    query_params_interface_name: Optional[str] = None
    plain_path_template: Optional[str] = None
    value_path_template: Optional[str] = None
    canonical_path: Optional[str] = None

    @property
    def path_params(self) -> list[APIParameter]:
        return [p for p in self.parameters if p.location == ParameterLocation.PATH]

    @property
    def query_params(self) -> list[APIParameter]:
        return [p for p in self.parameters if p.location == ParameterLocation.QUERY]


class ModelProperty(BaseModel):
    """One property of a component schema."""

    name: str
    schema_type: Optional[str] = None
    data_type: Optional[str] = None
    required: bool = False
    description: Optional[str] = None

    # Set by the generator pass.
    use_readonly_modifier: bool = False

    @property
    def optional(self) -> bool:
        return not self.required


class APIModel(BaseModel):
    """A component schema that becomes one generated model file."""

    name: str
    properties: list[ModelProperty] = Field(default_factory=list)
    description: Optional[str] = None

    # Set by the generator pass.
    is_input_dto: bool = False
    use_readonly_modifier: bool = False
    class_name: Optional[str] = None
    file_name: Optional[str] = None


class APIInfo(BaseModel):
    """API metadata extracted from the spec's *Info Object*."""

    title: str
    version: str
    description: Optional[str] = None


class ParsedSpec(BaseModel):
    """Complete parsed representation of an OpenAPI specification.

    ``operations`` are ordered by path declaration order, then by
    :class:`HTTPMethod` order within each path.
    """

    info: APIInfo
    operations: list[APIOperation] = Field(default_factory=list)
    models: list[APIModel] = Field(default_factory=list)
    openapi_version: str = Field(
        description="OpenAPI version string as declared (e.g., '3.0.3', '3.1.0')"
    )


# --- Generation Output Models ---


class TagUsage(BaseModel):
    """Whether a tag has at least one retrieval and at least one mutation operation."""

    has_retrieval: bool = False
    has_mutation: bool = False


class OperationBundle(BaseModel):
    """All operations of one tag, bucketed for the renderer."""

    tag: str
    class_name: str
    file_slug: str
    operations: list[APIOperation] = Field(default_factory=list)
    get_operations: list[APIOperation] = Field(default_factory=list)
    mutation_operations: list[APIOperation] = Field(default_factory=list)

    @property
    def has_get_operations(self) -> bool:
        return bool(self.get_operations)

    @property
    def has_mutation_operations(self) -> bool:
        return bool(self.mutation_operations)


class ArtifactKind(str, enum.Enum):
    """Kinds of generated file and their folder/suffix conventions."""

    MODEL = "model"
    SERVICE = "service"
    RESOURCE = "resource"

    @property
    def folder(self) -> str:
        return "models" if self is ArtifactKind.MODEL else "api"

    @property
    def suffix(self) -> str:
        return {
            ArtifactKind.MODEL: ".ts",
            ArtifactKind.SERVICE: "-api.ts",
            ArtifactKind.RESOURCE: "-resources.ts",
        }[self]

    @property
    def template(self) -> str:
        return {
            ArtifactKind.MODEL: "model.ts.j2",
            ArtifactKind.SERVICE: "api-service.ts.j2",
            ArtifactKind.RESOURCE: "api-resource.ts.j2",
        }[self]


class Artifact(BaseModel):
    """One output file the renderer may emit."""

    kind: ArtifactKind
    path: str
    source: str = Field(description="Tag name or model name the file is built from")
    skipped: bool = False


class GenerationPlan(BaseModel):
    """The enriched model handed to the renderer."""

    api_title: str
    api_version: str
    options: GeneratorOptions
    models: list[APIModel] = Field(default_factory=list)
    bundles: list[OperationBundle] = Field(default_factory=list)
    tag_usage: dict[str, TagUsage] = Field(default_factory=dict)
    skip_set: frozenset[str] = Field(default_factory=frozenset)
    artifacts: list[Artifact] = Field(default_factory=list)

    @property
    def emitted(self) -> list[Artifact]:
        return [a for a in self.artifacts if not a.skipped]

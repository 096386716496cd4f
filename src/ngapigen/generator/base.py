"""Extension points a client generator implements.

The driver (:func:`~ngapigen.generator.driver.build_plan`) calls these hooks
in a fixed order, so a generator only decides *what* each hook returns and
never how the pass is sequenced:

1. :meth:`CodegenHooks.process_options`
2. :meth:`CodegenHooks.process_openapi`
3. :meth:`CodegenHooks.post_process_models`
4. :meth:`CodegenHooks.post_process_operations`, once per tag

The naming hooks (:meth:`~CodegenHooks.to_model_filename` and friends) may be
called at any point after :meth:`~CodegenHooks.process_options`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ngapigen.models import (
    APIModel,
    APIOperation,
    ArtifactKind,
    GeneratorOptions,
    HTTPMethod,
    OperationBundle,
    ParsedSpec,
)


class CodegenHooks(ABC):
    """Abstract base class for client generators.

    Args:
        options: The effective options for this run.
    """

    def __init__(self, options: Optional[GeneratorOptions] = None) -> None:
        self.options = options or GeneratorOptions()

    @property
    @abstractmethod
    def name(self) -> str:
        """Short generator name used in logs and the CLI."""

    @property
    def help(self) -> str:
        return ""

    @abstractmethod
    def process_options(self) -> list[ArtifactKind]:
        """Finalise options and return the per-tag artifact kinds to emit."""

    @abstractmethod
    def process_openapi(self, spec: ParsedSpec) -> frozenset[str]:
        """Scan the whole spec once and return the artifact skip set."""

    @abstractmethod
    def to_model_filename(self, name: str) -> str: ...

    @abstractmethod
    def to_api_filename(self, tag: str) -> str: ...

    @abstractmethod
    def to_api_name(self, tag: str) -> str: ...

    @abstractmethod
    def to_operation_id(
        self, operation_id: Optional[str], method: HTTPMethod, path: str
    ) -> str: ...

    @abstractmethod
    def post_process_models(self, models: list[APIModel]) -> list[APIModel]:
        """Decorate every model."""

    @abstractmethod
    def post_process_operations(
        self, tag: str, operations: list[APIOperation]
    ) -> OperationBundle:
        """Decorate one tag's operations and bucket them for the renderer."""

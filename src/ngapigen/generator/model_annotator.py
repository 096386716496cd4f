"""Classify models as write payloads or read-only output.

A model whose name ends in ``Create``, ``Update``, ``Request`` or ``Input`` is
an *input DTO*. Every other model is output, and its properties get the
``readonly`` modifier when the option is on. The classification looks at the
name only; it does not check which operations use the model.
"""

from __future__ import annotations

from typing import Iterable

from ngapigen.generator.naming import camelize, model_filename
from ngapigen.models import APIModel, GeneratorOptions

INPUT_DTO_SUFFIXES = ("Create", "Update", "Request", "Input")


def is_input_dto(name: str) -> bool:
    return name.endswith(INPUT_DTO_SUFFIXES)


def annotate_model(model: APIModel, options: GeneratorOptions) -> APIModel:
    """Decorate *model* and its properties in place and return it."""
    model.is_input_dto = is_input_dto(model.name)
    readonly = options.readonly_output_models and not model.is_input_dto
    model.use_readonly_modifier = readonly
    for prop in model.properties:
        prop.use_readonly_modifier = readonly
    model.class_name = camelize(model.name) or model.name
    model.file_name = model_filename(model.name)
    return model


def annotate_models(models: Iterable[APIModel], options: GeneratorOptions) -> list[APIModel]:
    return [annotate_model(model, options) for model in models]

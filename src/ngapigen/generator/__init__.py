"""Client generator -- annotate a parsed OpenAPI spec for template rendering.

This sub-package turns a :class:`~ngapigen.models.ParsedSpec` into a
:class:`~ngapigen.models.GenerationPlan`: which files exist, which are
skipped, and the names and path templates every template needs.

Typical usage::

    from ngapigen.generator import build_plan
    from ngapigen.models import GeneratorOptions

    plan = build_plan(parsed_spec, options=GeneratorOptions())
    print(sorted(plan.skip_set))

Sub-modules:

* :mod:`~ngapigen.generator.naming` -- file slugs and identifier casing.
* :mod:`~ngapigen.generator.path_template` -- plain and value path templates.
* :mod:`~ngapigen.generator.tag_usage` -- per-tag retrieval/mutation summary.
* :mod:`~ngapigen.generator.routing` -- the artifact skip set.
* :mod:`~ngapigen.generator.operations` -- per-operation annotations.
* :mod:`~ngapigen.generator.model_annotator` -- input DTO / readonly flags.
* :mod:`~ngapigen.generator.base` -- the hook interface a generator implements.
* :mod:`~ngapigen.generator.client` -- the signal-based Angular generator.
* :mod:`~ngapigen.generator.driver` -- runs the hooks in order.
"""

from ngapigen.generator.client import SignalClientGenerator
from ngapigen.generator.driver import build_plan

__all__ = ["build_plan", "SignalClientGenerator"]

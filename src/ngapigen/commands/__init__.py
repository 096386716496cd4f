"""Built-in CLI commands registered on the root :data:`~ngapigen.app.app`.

* :mod:`~ngapigen.commands.inspect` -- ``plan`` and ``tags``, read-only views
  of what a run would produce.
* :mod:`~ngapigen.commands.generate` -- ``generate``, which renders the plan.
"""

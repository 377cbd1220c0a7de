"""The documentation synthesis core.

Turns an in-memory specification document into ``(apis, models)`` record
arrays.  Nothing in this sub-package performs I/O.

Typical usage::

    from specdoc.parser import load_spec
    from specdoc.synthesis import synthesize

    apis, models = synthesize(load_spec("openapi.yaml"))

Sub-modules, leaves first:

* :mod:`~specdoc.synthesis.type_mapper` -- schema type/format to property type.
* :mod:`~specdoc.synthesis.shapes` -- Swagger 2.0 / OpenAPI 3.x accessors.
* :mod:`~specdoc.synthesis.properties` -- recursive schema flattening.
* :mod:`~specdoc.synthesis.naming` -- casing and operationId synthesis.
* :mod:`~specdoc.synthesis.heuristics` -- pagination, auth, business purpose.
* :mod:`~specdoc.synthesis.model_extractor` -- model records and deduplication.
* :mod:`~specdoc.synthesis.operation_builder` -- API records.
* :mod:`~specdoc.synthesis.synthesizer` -- the single-pass driver.
"""

from specdoc.synthesis.synthesizer import synthesize

__all__ = ["synthesize"]

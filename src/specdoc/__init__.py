"""specdoc -- Synthesize API and model documentation records from OpenAPI specs.

This package reads an OpenAPI 3.x or Swagger 2.0 document and produces two
normalized record sets: one :class:`~specdoc.models.ApiDocumentation` per
path + method pair, and one :class:`~specdoc.models.ModelDocumentation` per
query-parameter bag, request body, response body, paginated record and
standalone component schema. Downstream tools (spreadsheet writers, code
template renderers) consume those records.

Typical workflow::

    specdoc generate openapi.yaml --output-dir documents/
    specdoc analyze openapi.yaml --strict

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    parser: Document loading and ``$ref`` resolution.
    synthesis: The documentation synthesis core.
    analysis: Completeness and consistency checks over the records.
"""

__version__ = "0.1.0"

"""Specification parser -- load documents and resolve ``$ref`` pointers.

Typical usage::

    from specdoc.parser import load_spec, validate_spec_version

    document = load_spec("https://petstore.swagger.io/v2/swagger.json")
    version = validate_spec_version(document)

Sub-modules:

* :mod:`~specdoc.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and version validation.
* :mod:`~specdoc.parser.resolver` -- One-level ``$ref`` resolution that never
  fails on malformed pointers.
"""

from specdoc.parser.loader import load_spec, validate_spec_version
from specdoc.parser.resolver import resolve_schema

__all__ = ["load_spec", "validate_spec_version", "resolve_schema"]

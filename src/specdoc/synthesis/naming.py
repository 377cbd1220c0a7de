"""Deterministic identifier casing and operationId synthesis.

Every function here is a pure function of its string input.  Words are split
at lower-to-upper case boundaries (``petId`` -> ``pet``, ``Id``), at acronym
boundaries (``HTTPServer`` -> ``HTTP``, ``Server``) and at every run of
non-alphanumeric characters, then re-joined in the requested casing:

* :func:`kebab_case` -- ``list-pets``
* :func:`camel_case` -- ``listPets``
* :func:`pascal_case` -- ``ListPets``

The filename helpers at the bottom are the naming contract shared with the
template-rendering collaborator.
"""

from __future__ import annotations

import re

# "petId" -> "pet Id", "v2Api" -> "v2 Api"
_CASE_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")
# "HTTPServer" -> "HTTP Server"
_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_SEPARATOR_RE = re.compile(r"[^a-zA-Z0-9]+")

_PATH_PARAM_RE = re.compile(r"\{[^}]+\}")
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")
_TRAILING_BY_RE = re.compile(r"By$")


def split_words(text: str) -> list[str]:
    """Split *text* into words at case, acronym and separator boundaries.

    Example::

        >>> split_words("getHTTPServer_status")
        ['get', 'HTTP', 'Server', 'status']
    """
    result = _CASE_BOUNDARY_RE.sub(r"\1 \2", text)
    result = _ACRONYM_BOUNDARY_RE.sub(r"\1 \2", result)
    return [word for word in _SEPARATOR_RE.split(result) if word]


def kebab_case(text: str) -> str:
    return "-".join(word.lower() for word in split_words(text))


def camel_case(text: str) -> str:
    words = split_words(text)
    if not words:
        return ""
    return words[0].lower() + "".join(_capitalize(word) for word in words[1:])


def pascal_case(text: str) -> str:
    return "".join(_capitalize(word) for word in split_words(text))


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def generate_operation_id(method: str, path: str) -> str:
    """Synthesize an operationId for an operation that declares none.

    Path parameters are replaced with ``By`` and a trailing ``By`` becomes
    ``ById``, so that item and collection endpoints stay distinct.

    Example::

        >>> generate_operation_id("GET", "/items")
        'getItems'
        >>> generate_operation_id("DELETE", "/users/{userId}")
        'deleteUsersById'
    """
    clean_path = _PATH_PARAM_RE.sub("By", path)
    clean_path = _NON_ALNUM_RE.sub("", clean_path)
    clean_path = _TRAILING_BY_RE.sub("ById", clean_path)
    return camel_case(f"{method.lower()}_{clean_path}")


# ---------------------------------------------------------------------------
# Filenames for generated artefacts
# ---------------------------------------------------------------------------


def operation_filename(operation_id: str, suffix: str, extension: str = "ts") -> str:
    return f"{kebab_case(operation_id)}-{suffix}.{extension}"


def model_filename(model_name: str) -> str:
    return f"{kebab_case(model_name)}.model.ts"


def service_filename(tag: str) -> str:
    return f"{kebab_case(tag)}.service.ts"


def query_filename(operation_id: str, kind: str) -> str:
    """Filename of a data-fetching hook; *kind* is ``"query"`` or ``"mutation"``."""
    if kind not in ("query", "mutation"):
        raise ValueError(f"kind must be 'query' or 'mutation', got {kind!r}")
    return f"use-{kebab_case(operation_id)}-{kind}.query.ts"


def constant_filename(tag: str) -> str:
    return f"{kebab_case(tag)}.constant.ts"

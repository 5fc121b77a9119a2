"""
OpenAPI 3.0 output.

FastAPI generates an OpenAPI 3.1 document from pydantic's JSON Schema. The
API publishes 3.0, so the generated document is rewritten once:

- `anyOf: [X, {"type": "null"}]` becomes X with `nullable: true`
  (a `$ref` is wrapped in `allOf`, since 3.0 ignores siblings of `$ref`)
- nested `$defs` are hoisted into `components.schemas`
"""

from typing import Any, Dict

from fastapi import FastAPI

OPENAPI_VERSION = "3.0.3"

NULL_SCHEMA = {"type": "null"}


def _make_nullable(node: Dict[str, Any]) -> None:
    options = node.get("anyOf")
    if not isinstance(options, list) or NULL_SCHEMA not in options:
        return

    rest = [option for option in options if option != NULL_SCHEMA]
    del node["anyOf"]
    if len(rest) == 1:
        only = rest[0]
        if "$ref" in only:
            node["allOf"] = [only]
        else:
            node.update(only)
    else:
        node["anyOf"] = rest
    node["nullable"] = True


def _rewrite(node: Any, defs: Dict[str, Any]) -> None:
    if isinstance(node, dict):
        if "$defs" in node:
            defs.update(node.pop("$defs"))
        _make_nullable(node)
        for value in node.values():
            _rewrite(value, defs)
    elif isinstance(node, list):
        for item in node:
            _rewrite(item, defs)


def to_openapi_30(document: Dict[str, Any]) -> Dict[str, Any]:
    """Rewrite a generated OpenAPI 3.1 document in place as 3.0."""
    document["openapi"] = OPENAPI_VERSION

    defs: Dict[str, Any] = {}
    _rewrite(document, defs)

    schemas = document.setdefault("components", {}).setdefault("schemas", {})
    for name, schema in defs.items():
        _rewrite(schema, {})
        schemas.setdefault(name, schema)
    return document


def install(app: FastAPI) -> None:
    """Serve the 3.0 rewrite of the app's generated document."""
    generate = app.openapi
    app.openapi_version = OPENAPI_VERSION

    def openapi() -> Dict[str, Any]:
        if app.openapi_schema is None:
            # FastAPI caches the generated document on app.openapi_schema
            to_openapi_30(generate())
        return app.openapi_schema

    app.openapi = openapi

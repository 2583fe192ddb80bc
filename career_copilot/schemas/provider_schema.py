"""Pydantic model -> the JSON-schema subset accepted as a Gemini response schema.

Gemini rejects ``$ref``/``$defs``, ``title``, ``default`` and ``anyOf`` unions,
so references are inlined, optional fields become ``nullable`` and
``int | float`` collapses to ``NUMBER``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

_TYPE_NAMES = {
    "object": "OBJECT",
    "array": "ARRAY",
    "string": "STRING",
    "number": "NUMBER",
    "integer": "INTEGER",
    "boolean": "BOOLEAN",
}


def provider_json_schema(model: type[BaseModel]) -> dict[str, Any]:
    raw = model.model_json_schema(by_alias=True)
    return _convert(raw, raw.get("$defs", {}))


def _convert(node: dict[str, Any], defs: dict[str, Any]) -> dict[str, Any]:
    if "$ref" in node:
        return _convert(defs[node["$ref"].rsplit("/", 1)[-1]], defs)

    if "anyOf" in node:
        options = [option for option in node["anyOf"] if option.get("type") != "null"]
        nullable = len(options) != len(node["anyOf"])
        if options and {option.get("type") for option in options} <= {"integer", "number"}:
            converted: dict[str, Any] = {"type": "NUMBER"}
            for bound in ("minimum", "maximum"):
                values = [source[bound] for source in (node, *options) if bound in source]
                if values:
                    converted[bound] = values[0]
        elif options:
            converted = _convert(options[0], defs)
        else:
            converted = {"type": "STRING"}
        if nullable:
            converted["nullable"] = True
        return converted

    out: dict[str, Any] = {}
    json_type = node.get("type", "string")
    out["type"] = _TYPE_NAMES.get(json_type, "STRING")
    if node.get("description"):
        out["description"] = node["description"]
    if "enum" in node:
        out["enum"] = [str(value) for value in node["enum"]]
    elif "const" in node:
        out["enum"] = [str(node["const"])]

    if json_type == "object":
        properties = node.get("properties", {})
        out["properties"] = {name: _convert(prop, defs) for name, prop in properties.items()}
        if node.get("required"):
            out["required"] = list(node["required"])
    elif json_type == "array":
        out["items"] = _convert(node.get("items", {"type": "string"}), defs)
    elif json_type in {"number", "integer"}:
        for bound in ("minimum", "maximum"):
            if bound in node:
                out[bound] = node[bound]
    return out

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from typing import Iterable

from gml_fmt.lexer.tokens import Token


def ast_to_payload(node: object) -> object:
    if isinstance(node, Token):
        payload: dict[str, object] = {"token": node.type, "at": f"{node.line}:{node.column}"}
        if node.value is not None:
            payload["value"] = node.value
        return payload
    if is_dataclass(node) and not isinstance(node, type):
        payload = {"node": type(node).__name__}
        for item in fields(node):
            payload[item.name] = ast_to_payload(getattr(node, item.name))
        return payload
    if isinstance(node, (list, tuple)):
        return [ast_to_payload(item) for item in node]
    return node


def dump_ast(statements: Iterable[object]) -> str:
    payload = [ast_to_payload(stmt) for stmt in statements]
    return json.dumps(payload, indent=2, ensure_ascii=False)


__all__ = ["ast_to_payload", "dump_ast"]

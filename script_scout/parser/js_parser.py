# === FILE: script_scout/parser/js_parser.py ===
"""JavaScript parsing for the complexity analyzer.

Thin wrapper over `tree-sitter <https://pypi.org/project/tree-sitter/>`_ with
the ``tree-sitter-javascript`` grammar, which follows current ECMAScript
(optional chaining, class fields, numeric separators and so on). Trees that
contain syntax errors surface as :class:`~script_scout.errors.SourceParseError`.
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

from script_scout.errors import SourceParseError

__all__: Sequence[str] = ("JS_LANGUAGE", "parse_script", "iter_nodes", "operator_of")

JS_LANGUAGE = Language(tree_sitter_javascript.language())


def parse_script(source: str) -> Node:
    """Parse *source* and return the root ``program`` node."""
    parser = Parser(JS_LANGUAGE)
    try:
        tree = parser.parse(source.encode("utf-8"))
    except (ValueError, RuntimeError) as exc:
        raise SourceParseError(str(exc) or type(exc).__name__) from exc

    root = tree.root_node
    if root.has_error:
        line, column = _first_error_position(root)
        raise SourceParseError(f"Syntax error near line {line + 1}, column {column + 1}")
    return root


def _first_error_position(root: Node) -> tuple[int, int]:
    for node in _walk(root, named_only=False):
        if node.is_error or node.is_missing:
            return node.start_point
    return root.start_point


def _walk(root: Node, *, named_only: bool) -> Iterator[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        children = node.named_children if named_only else node.children
        stack.extend(reversed(children))


def iter_nodes(tree: Node) -> Iterator[Node]:
    """Yield every named node of *tree* in depth-first pre-order.

    Iterative so that deeply nested minified bundles do not hit the
    recursion limit. Anonymous tokens (keywords, punctuation) are skipped.
    """
    yield from _walk(tree, named_only=True)


def operator_of(node: Node) -> str:
    """Operator token of a ``binary_expression``, ``""`` for other nodes."""
    operator = node.child_by_field_name("operator")
    return operator.type if operator is not None else ""

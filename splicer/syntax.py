# splicer/syntax.py
from __future__ import annotations

from functools import lru_cache
from typing import Optional, Set, Tuple

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

from .validate_blocks import CodeSyntaxError

# The grammar accepts JSX, so leaked markup like <div id="hud"></div> parses.
# Plain browser scripts have no JSX; any jsx_* node is rejected.
_JSX_PREFIX = "jsx_"
_MODULE_ONLY = frozenset({"import_statement", "export_statement"})
_SCOPES = frozenset({"program", "statement_block"})


@lru_cache(maxsize=1)
def _javascript_parser() -> Parser:
    return Parser(Language(tree_sitter_javascript.language()))


def _where(node: Node) -> str:
    row, col = node.start_point
    return f"line {row + 1}, column {col + 1}"


def _snippet(node: Node) -> str:
    lines = (node.text or b"").decode("utf-8", errors="replace").strip().splitlines()
    return lines[0][:40] if lines else ""


def _first_error(root: Node) -> Optional[Node]:
    # Depth-first, document order; only descend where an error is known to be.
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing or node.type == "ERROR":
            return node
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return None


def _describe(node: Node) -> str:
    if node.is_missing:
        return f"Missing {node.type!r} at {_where(node)}"
    near = _snippet(node)
    return f"Unexpected token near {near!r} at {_where(node)}" if near else f"Unexpected token at {_where(node)}"


def _declared_name(node: Node) -> Optional[Node]:
    name = node.child_by_field_name("name")
    if name is not None and name.type == "identifier":
        return name
    return None


def _duplicate_lexical(scope: Node) -> Optional[Node]:
    """
    First let/const/class name declared twice directly in scope, or clashing
    with a var/function of the same scope. Destructuring patterns and names
    hoisted from nested blocks are not tracked.
    """
    lexical: Set[str] = set()
    other: Set[str] = set()
    for child in scope.named_children:
        if child.type == "lexical_declaration":
            names = [_declared_name(d) for d in child.named_children if d.type == "variable_declarator"]
            is_lexical = True
        elif child.type == "class_declaration":
            names = [_declared_name(child)]
            is_lexical = True
        elif child.type == "variable_declaration":
            names = [_declared_name(d) for d in child.named_children if d.type == "variable_declarator"]
            is_lexical = False
        elif child.type == "function_declaration":
            names = [_declared_name(child)]
            is_lexical = False
        else:
            continue

        for name in names:
            if name is None:
                continue
            text = name.text.decode("utf-8")
            if text in lexical or (is_lexical and text in other):
                return name
            (lexical if is_lexical else other).add(text)
    return None


def _early_error(root: Node, module: bool) -> Optional[Tuple[Node, str]]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type.startswith(_JSX_PREFIX):
            return node, f"Unexpected markup near {_snippet(node)!r} at {_where(node)}"
        if not module and node.type in _MODULE_ONLY:
            return node, f"Cannot use import/export outside a module at {_where(node)}"
        if node.type in _SCOPES:
            dup = _duplicate_lexical(node)
            if dup is not None:
                name = dup.text.decode("utf-8")
                return dup, f"Identifier {name!r} has already been declared at {_where(dup)}"
        stack.extend(reversed(node.children))
    return None


def check_javascript(code: str, module: bool = False) -> None:
    """
    Syntax-only check of a classic script (or a module when module=True).
    Never executes anything.

    Besides grammar errors this rejects JSX/markup, import/export outside
    modules, and duplicate lexical declarations in one scope. Raises
    CodeSyntaxError with the first problem's location (1-based, relative
    to code).
    """
    tree = _javascript_parser().parse(code.encode("utf-8"))
    root = tree.root_node

    if root.has_error:
        node = _first_error(root)
        if node is None:
            raise CodeSyntaxError("Syntax error")
        raise CodeSyntaxError(_describe(node), line=node.start_point[0] + 1)

    found = _early_error(root, module)
    if found is not None:
        node, message = found
        raise CodeSyntaxError(message, line=node.start_point[0] + 1)


def check_javascript_module(code: str) -> None:
    check_javascript(code, module=True)

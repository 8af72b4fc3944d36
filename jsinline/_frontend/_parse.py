from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import TypeVar

import tree_sitter_javascript as tsjavascript
from tree_sitter import Language
from tree_sitter import Node as TSNode
from tree_sitter import Parser
from tree_sitter import Tree

from .._diagnostic import describe_range
from .._nodes import HOLE
from .._nodes import ArrayPattern
from .._nodes import Expression
from .._nodes import Hole
from .._nodes import Identifier
from .._nodes import Literal
from .._nodes import Node
from .._nodes import ObjectPattern
from .._nodes import Property
from .._nodes import VariableDeclaration
from .._nodes import VariableDeclarator
from .._utils import Cell

T = TypeVar("T", bound=Node)

JS_LANGUAGE = Language(tsjavascript.language())

_PARSER: Cell[Parser] = Cell()


def _get_parser() -> Parser:
    if (ans := _PARSER.get()) is None:
        ans = Parser()
        ans.language = JS_LANGUAGE
        _PARSER.value = ans
    return ans


# tree-sitter node type -> ESTree kind, for nodes we only need a kind for
_EXPRESSION_KINDS: dict[str, str] = {
    "sequence_expression": "SequenceExpression",
    "ternary_expression": "ConditionalExpression",
    "unary_expression": "UnaryExpression",
    "update_expression": "UpdateExpression",
    "assignment_expression": "AssignmentExpression",
    "augmented_assignment_expression": "AssignmentExpression",
    "arrow_function": "ArrowFunctionExpression",
    "function_expression": "FunctionExpression",
    "function": "FunctionExpression",
    "generator_function": "FunctionExpression",
    "class": "ClassExpression",
    "call_expression": "CallExpression",
    "new_expression": "NewExpression",
    "member_expression": "MemberExpression",
    "subscript_expression": "MemberExpression",
    "await_expression": "AwaitExpression",
    "yield_expression": "YieldExpression",
    "object": "ObjectExpression",
    "array": "ArrayExpression",
    "template_string": "TemplateLiteral",
    "this": "ThisExpression",
    "rest_pattern": "RestElement",
    "assignment_pattern": "AssignmentPattern",
    "object_assignment_pattern": "AssignmentPattern",
}

_LITERALS = ("number", "string", "true", "false", "null", "regex")

_LOGICAL_OPERATORS = ("&&", "||", "??")


class ParseError(ValueError):
    def __init__(self, msg: str, start: int, end: int):
        super().__init__(msg)
        self.start = start
        self.end = end


def _offset_table(source: str) -> list[int] | None:
    """utf-8 byte offset -> character offset; None when they agree"""
    if source.isascii():
        return None
    ans: list[int] = []
    for i, c in enumerate(source):
        ans.extend([i] * len(c.encode()))
    ans.append(len(source))
    return ans


def key_of(ts: TSNode) -> tuple[str, int, int]:
    return (ts.type, ts.start_byte, ts.end_byte)


def named_children(ts: TSNode) -> list[TSNode]:
    return [x for x in ts.named_children if x.type != "comment"]


@dataclass
class Module:
    """
    a parsed source file.

    tree-sitter nodes are converted lazily; converting the same tree-sitter
    node twice gives the same object, so that identity can be used to match
    identifiers from scope analysis against the ones in patterns.
    """

    source: str
    tree: Tree
    _offsets: list[int] | None = None
    _cache: dict[tuple[str, int, int], Node] = field(default_factory=lambda: {})

    @property
    def root(self) -> TSNode:
        return self.tree.root_node

    def pos(self, byte: int) -> int:
        if self._offsets is None:
            return byte
        return self._offsets[byte]

    def text(self, ts: TSNode) -> str:
        return self.source[self.pos(ts.start_byte) : self.pos(ts.end_byte)]

    def _cached(self, ts: TSNode, typ: type[T]) -> T | None:
        ans = self._cache.get(key_of(ts))
        assert ans is None or isinstance(ans, typ)
        return ans

    def _store(self, ts: TSNode, node: T) -> T:
        self._cache[key_of(ts)] = node
        return node

    ############################################################################

    def identifier(self, ts: TSNode) -> Identifier:
        if ans := self._cached(ts, Identifier):
            return ans
        return self._store(
            ts, Identifier(self.pos(ts.start_byte), self.pos(ts.end_byte), name=self.text(ts))
        )

    def declaration(self, ts: TSNode) -> VariableDeclaration:
        if ans := self._cached(ts, VariableDeclaration):
            return ans
        assert ts.type in ("lexical_declaration", "variable_declaration"), ts.type
        kind = ts.children[0].type
        children = [x for x in ts.named_children if x.type == "variable_declarator"]
        declarators = tuple(self.declarator(x) for x in children)
        end = ts.end_byte
        if ts.parent is not None and ts.parent.type == "for_statement" and children:
            # tree-sitter puts the `;` of a for header inside the declaration
            end = children[-1].end_byte
        return self._store(
            ts,
            VariableDeclaration(self.pos(ts.start_byte), self.pos(end), declarations=declarators, kind=kind),
        )

    def declarator(self, ts: TSNode) -> VariableDeclarator:
        if ans := self._cached(ts, VariableDeclarator):
            return ans
        name = ts.child_by_field_name("name")
        value = ts.child_by_field_name("value")
        assert name is not None
        return self._store(
            ts,
            VariableDeclarator(
                self.pos(ts.start_byte),
                self.pos(ts.end_byte),
                id=self.pattern(name),
                init=self.expression(value) if value is not None else None,
            ),
        )

    def pattern(self, ts: TSNode) -> Node:
        if ts.type == "identifier":
            return self.identifier(ts)
        if ts.type == "object_pattern":
            return self._object_pattern(ts)
        if ts.type == "array_pattern":
            return self._array_pattern(ts)
        return self.expression(ts)

    def _object_pattern(self, ts: TSNode) -> ObjectPattern:
        if ans := self._cached(ts, ObjectPattern):
            return ans
        properties: list[Node] = []
        for x in named_children(ts):
            if x.type == "shorthand_property_identifier_pattern":
                start, end = self.pos(x.start_byte), self.pos(x.end_byte)
                properties.append(
                    Property(start, end, key=Identifier(start, end, name=self.text(x)), value=self.identifier(x))
                )
            elif x.type == "pair_pattern":
                properties.append(self._pair_pattern(x))
            else:
                properties.append(self._expression(x))
        return self._store(
            ts, ObjectPattern(self.pos(ts.start_byte), self.pos(ts.end_byte), properties=tuple(properties))
        )

    def _pair_pattern(self, ts: TSNode) -> Property:
        key = ts.child_by_field_name("key")
        value = ts.child_by_field_name("value")
        assert key is not None and value is not None

        if key.type == "computed_property_name":
            (inner,) = named_children(key)
            key_node, computed = self.expression(inner), True
        else:
            key_node, computed = self.expression(key), False

        return self._store(
            ts,
            Property(
                self.pos(ts.start_byte),
                self.pos(ts.end_byte),
                key=key_node,
                value=self.pattern(value),
                computed=computed,
            ),
        )

    def _array_pattern(self, ts: TSNode) -> ArrayPattern:
        if ans := self._cached(ts, ArrayPattern):
            return ans
        # holes have no node of their own; they show up as commas with
        # nothing before them
        elements: list[Node | Hole] = []
        pending: Node | None = None
        for x in ts.children:
            if x.type == ",":
                elements.append(pending if pending is not None else HOLE)
                pending = None
            elif x.type == "]":
                if pending is not None:
                    elements.append(pending)
            elif x.is_named and x.type != "comment":
                pending = self.pattern(x)
        return self._store(
            ts, ArrayPattern(self.pos(ts.start_byte), self.pos(ts.end_byte), elements=tuple(elements))
        )

    def expression(self, ts: TSNode) -> Node:
        # ESTree has no node for parentheses
        while ts.type == "parenthesized_expression":
            (ts,) = named_children(ts)
        if ts.type == "identifier":
            return self.identifier(ts)
        if ts.type in ("property_identifier", "private_property_identifier"):
            return Identifier(self.pos(ts.start_byte), self.pos(ts.end_byte), name=self.text(ts))
        return self._expression(ts)

    def _expression(self, ts: TSNode) -> Node:
        start, end = self.pos(ts.start_byte), self.pos(ts.end_byte)
        if ts.type in _LITERALS:
            return Literal(start, end, raw=self.text(ts))
        if ts.type == "binary_expression":
            op = ts.child_by_field_name("operator")
            if op is not None and op.type in _LOGICAL_OPERATORS:
                return Expression(start, end, kind="LogicalExpression")
            return Expression(start, end, kind="BinaryExpression")
        return Expression(start, end, kind=_EXPRESSION_KINDS.get(ts.type, ts.type))


def parse_module(source: str) -> Module:
    tree = _get_parser().parse(source.encode())
    module = Module(source, tree, _offset_table(source))

    if tree.root_node.has_error:
        err = _first_error(tree.root_node)
        start, end = module.pos(err.start_byte), module.pos(err.end_byte)
        raise ParseError(f"syntax error at {describe_range(source, start, end).plain}", start, end)

    logging.debug(f"parsed module of {len(source)} characters")
    return module


def _first_error(ts: TSNode) -> TSNode:
    if ts.type == "ERROR" or ts.is_missing:
        return ts
    for x in ts.children:
        if x.has_error:
            return _first_error(x)
    return ts

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field

import rich.repr
from tree_sitter import Node as TSNode

from .._nodes import Definition
from .._nodes import Reference
from .._nodes import Variable
from ._parse import Module
from ._parse import key_of
from ._parse import named_children
from ._parse import parse_module

_FUNCTIONS = (
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
)

_BLOCKS = (
    "statement_block",
    "for_statement",
    "for_in_statement",
    "catch_clause",
    "switch_body",
    "class_body",
)

# identifier-like nodes that may name a variable
_NAMES = (
    "identifier",
    "shorthand_property_identifier",
    "shorthand_property_identifier_pattern",
)

# nodes that can stand between a name and the assignment it is the target of
_PATTERNS = (
    "array_pattern",
    "object_pattern",
    "pair_pattern",
    "array",
    "object",
    "pair",
    "spread_element",
    "assignment_pattern",
    "object_assignment_pattern",
    "rest_pattern",
)


def _same(a: TSNode | None, b: TSNode) -> bool:
    return a is not None and key_of(a) == key_of(b)


def pattern_names(ts: TSNode) -> list[TSNode]:
    """the names a binding pattern declares, in source order"""
    if ts.type in ("identifier", "shorthand_property_identifier_pattern"):
        return [ts]
    if ts.type in ("object_pattern", "array_pattern", "rest_pattern"):
        return [n for x in named_children(ts) for n in pattern_names(x)]
    if ts.type == "pair_pattern":
        value = ts.child_by_field_name("value")
        return pattern_names(value) if value is not None else []
    if ts.type in ("assignment_pattern", "object_assignment_pattern"):
        left = ts.child_by_field_name("left")
        return pattern_names(left) if left is not None else []
    return []


def _is_export_alias(ts: TSNode) -> bool:
    # the `b` of `export { a as b }` names an export, not a variable
    parent = ts.parent
    if parent is None or parent.type != "export_specifier":
        return False
    return _same(parent.child_by_field_name("alias"), ts)


def is_write(ts: TSNode) -> bool:
    node = ts
    parent = node.parent
    while parent is not None and parent.type in _PATTERNS:
        if parent.type in ("pair_pattern", "pair") and not _same(parent.child_by_field_name("value"), node):
            # a computed key
            return False
        if parent.type in ("assignment_pattern", "object_assignment_pattern") and not _same(
            parent.child_by_field_name("left"), node
        ):
            # a default value
            return False
        node, parent = parent, parent.parent

    if parent is None:
        return False
    if parent.type in ("assignment_expression", "augmented_assignment_expression", "for_in_statement"):
        return _same(parent.child_by_field_name("left"), node)
    if parent.type == "update_expression":
        return _same(parent.child_by_field_name("argument"), node)
    return False


@dataclass(eq=False)
class _Scope:
    parent: _Scope | None
    is_function: bool
    names: set[str] = field(default_factory=lambda: set())

    def function_scope(self) -> _Scope:
        ans = self
        while not ans.is_function:
            assert ans.parent is not None
            ans = ans.parent
        return ans

    def lookup(self, name: str) -> _Scope | None:
        ans: _Scope | None = self
        while ans is not None and name not in ans.names:
            ans = ans.parent
        return ans


@dataclass
class ModuleScope:
    module: Module
    variables: list[Variable]

    @property
    def source(self) -> str:
        return self.module.source

    def __contains__(self, name: str) -> bool:
        return any(v.name == name for v in self.variables)

    def variable(self, name: str) -> Variable:
        for v in self.variables:
            if v.name == name:
                return v
        raise KeyError(f"no module level variable named `{name}`")

    def __rich_repr__(self) -> rich.repr.Result:
        yield self.variables


class _Analyzer:
    """
    two walks over the tree: the first records what each scope declares,
    the second resolves every name against the scopes around it.

    only variables declared by var/let/const at module level are reported.
    """

    def __init__(self, module: Module) -> None:
        self.module = module
        self.global_scope = _Scope(None, True)
        self.scopes: dict[tuple[str, int, int], _Scope] = {key_of(module.root): self.global_scope}
        # names at declaration sites, which are not references
        self.declared: set[tuple[str, int, int]] = set()
        self.variables: dict[str, Variable] = {}

    def _declare(self, scope: _Scope, names: list[TSNode]) -> None:
        for x in names:
            scope.names.add(self.module.text(x))
            self.declared.add(key_of(x))

    def _declare_variables(self, scope: _Scope, ts: TSNode) -> None:
        if ts.type == "variable_declaration":
            scope = scope.function_scope()

        for d in named_children(ts):
            if d.type != "variable_declarator":
                continue
            name = d.child_by_field_name("name")
            assert name is not None
            names = pattern_names(name)
            self._declare(scope, names)

            if scope is self.global_scope:
                self._add_definition(ts, d, names)

    def _add_definition(self, decl: TSNode, declarator: TSNode, names: list[TSNode]) -> None:
        parent = self.module.declaration(decl)
        has_init = declarator.child_by_field_name("value") is not None
        for x in names:
            name = self.module.text(x)
            v = self.variables.setdefault(name, Variable(name))
            identifier = self.module.identifier(x)
            v.defs.append(Definition(identifier, parent))
            v.identifiers.append(identifier)
            if has_init:
                v.references.append(Reference(identifier, init=True, write=True))

    def declare(self, ts: TSNode, scope: _Scope) -> None:
        if ts.type in _FUNCTIONS:
            name = ts.child_by_field_name("name")
            inner = _Scope(scope, True)
            self.scopes[key_of(ts)] = inner
            if name is not None and ts.type in ("function_declaration", "generator_function_declaration"):
                self._declare(scope, [name])
            elif name is not None and name.type == "identifier":
                self._declare(inner, [name])

            if (param := ts.child_by_field_name("parameter")) is not None:
                self._declare(inner, pattern_names(param))
            if (params := ts.child_by_field_name("parameters")) is not None:
                self._declare(inner, [n for x in named_children(params) for n in pattern_names(x)])
            scope = inner

        elif ts.type in _BLOCKS:
            inner = _Scope(scope, False)
            self.scopes[key_of(ts)] = inner
            if ts.type == "catch_clause" and (param := ts.child_by_field_name("parameter")) is not None:
                self._declare(inner, pattern_names(param))
            if ts.type == "for_in_statement" and (kind := ts.child_by_field_name("kind")) is not None:
                left = ts.child_by_field_name("left")
                assert left is not None
                target = inner if kind.type != "var" else inner.function_scope()
                self._declare(target, pattern_names(left))
            scope = inner

        elif ts.type in ("lexical_declaration", "variable_declaration"):
            self._declare_variables(scope, ts)

        elif ts.type == "class_declaration":
            if (name := ts.child_by_field_name("name")) is not None:
                self._declare(scope, [name])

        elif ts.type == "import_statement":
            return

        for x in ts.children:
            self.declare(x, scope)

    def resolve(self, ts: TSNode, scope: _Scope) -> None:
        if ts.type == "import_statement":
            return
        scope = self.scopes.get(key_of(ts), scope)

        if ts.type in _NAMES and key_of(ts) not in self.declared and not _is_export_alias(ts):
            name = self.module.text(ts)
            if scope.lookup(name) is self.global_scope and (v := self.variables.get(name)):
                v.references.append(
                    Reference(
                        self.module.identifier(ts),
                        write=is_write(ts),
                        shorthand=ts.type == "shorthand_property_identifier",
                    )
                )

        for x in ts.children:
            self.resolve(x, scope)

    def run(self) -> ModuleScope:
        self.declare(self.module.root, self.global_scope)
        self.resolve(self.module.root, self.global_scope)
        for v in self.variables.values():
            v.references.sort(key=lambda r: r.identifier.start)
        logging.debug(f"module level variables: {list(self.variables)}")
        return ModuleScope(self.module, list(self.variables.values()))


def analyze_module(source: str | Module) -> ModuleScope:
    module = parse_module(source) if isinstance(source, str) else source
    return _Analyzer(module).run()

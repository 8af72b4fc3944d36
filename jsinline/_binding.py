from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import replace

import rich.repr
from rich.pretty import pretty_repr

from ._diagnostic import MultipleDefinitions
from ._diagnostic import NoMatchingBinding
from ._diagnostic import UnexpectedNodeType
from ._nodes import ArrayPattern
from ._nodes import Hole
from ._nodes import Identifier
from ._nodes import Literal
from ._nodes import Node
from ._nodes import ObjectPattern
from ._nodes import Property
from ._nodes import Variable
from ._nodes import VariableDeclaration
from ._nodes import VariableDeclarator


@dataclass(frozen=True)
class Access:
    """one step of `.key` or `[key]` applied to the initializer"""

    key: Node
    computed: bool

    def __rich_repr__(self) -> rich.repr.Result:
        yield self.key
        yield "computed", self.computed, False


@dataclass(frozen=True)
class Binding:
    id: Identifier
    # shared by all bindings of a declarator
    init: Node | None
    # outermost first
    accesses: tuple[Access, ...]
    # leaf (id) to root (the declaration)
    parents: tuple[Node, ...]

    def prepend_access(self, access: Access) -> Binding:
        return replace(self, accesses=(access,) + self.accesses)

    def append_parent(self, node: Node) -> Binding:
        return replace(self, parents=self.parents + (node,))


def get_binding_for_variable(variable: Variable) -> Binding:
    """
    Gets the binding info for a variable, which includes information about
    destructuring properties and the initial value of the variable.
    """
    if len(variable.defs) > 1:
        raise MultipleDefinitions(
            f"multiple definitions for `{variable.name}` found, cannot inline", variable.defs[1].name
        )
    if len(variable.defs) == 0:
        raise NoMatchingBinding(f"cannot find matching variable for `{variable.name}`")

    bindings = get_bindings(variable.defs[0].parent)
    for b in bindings:
        if any(b.id is x for x in variable.identifiers):
            logging.debug(f"binding for {variable.name}: {pretty_repr(b)}")
            return b

    raise NoMatchingBinding(
        f"cannot find matching variable for `{variable.name}`", variable.defs[0].parent
    )


def get_bindings(node: Node) -> tuple[Binding, ...]:
    """Gets all the bindings defined by a node."""
    if isinstance(node, VariableDeclaration):
        bindings = tuple(b for d in node.declarations for b in get_bindings(d))

    elif isinstance(node, VariableDeclarator):
        bindings = tuple(replace(b, init=node.init) for b in get_bindings(node.id))

    elif isinstance(node, Identifier):
        return (Binding(node, None, (), (node,)),)

    elif isinstance(node, ObjectPattern):
        bindings = tuple(b for p in node.properties for b in get_bindings(p))

    elif isinstance(node, ArrayPattern):
        bindings = tuple(
            b.prepend_access(Access(Literal.index(i), computed=True))
            for i, element in enumerate(node.elements)
            if not isinstance(element, Hole)
            for b in get_bindings(element)
        )

    elif isinstance(node, Property):
        access = Access(node.key, node.computed)
        bindings = tuple(b.prepend_access(access) for b in get_bindings(node.value))

    else:
        raise UnexpectedNodeType(f"unexpected node type: {node.type}", node)

    return tuple(b.append_parent(node) for b in bindings)

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import final

import rich.repr

################################################################################
# syntax tree
#
# nodes compare and hash by identity (eq=False): two identifiers spelled the
# same are still different bindings.
#
# nodes are never mutated after construction; removal is tracked by the Patcher


@dataclass(frozen=True, eq=False)
class NodeBase:
    start: int
    end: int

    @property
    def type(self) -> str:
        return type(self).__name__

    @property
    def has_position(self) -> bool:
        return self.start >= 0

    def __rich_repr__(self) -> rich.repr.Result:
        yield self.start
        yield self.end


@dataclass(frozen=True, eq=False)
class Identifier(NodeBase):
    name: str

    def __rich_repr__(self) -> rich.repr.Result:
        yield self.name
        yield from super().__rich_repr__()


@dataclass(frozen=True, eq=False)
class Literal(NodeBase):
    raw: str
    value: str | int | float | None = None

    @staticmethod
    def index(i: int) -> Literal:
        """a literal with no source position, for array positions"""
        return Literal(-1, -1, raw=str(i), value=i)


@final
class Hole:
    """an empty slot in an array pattern, such as the first one in `[, b]`"""

    def __repr__(self) -> str:
        return "HOLE"


HOLE = Hole()


@dataclass(frozen=True, eq=False)
class ObjectPattern(NodeBase):
    # Property, or an Expression for unsupported entries such as rest elements
    properties: tuple[Node, ...]


@dataclass(frozen=True, eq=False)
class Property(NodeBase):
    key: Node
    value: Node
    computed: bool = False


@dataclass(frozen=True, eq=False)
class ArrayPattern(NodeBase):
    elements: tuple[Node | Hole, ...]


@dataclass(frozen=True, eq=False)
class VariableDeclarator(NodeBase):
    id: Node
    init: Node | None = None


@dataclass(frozen=True, eq=False)
class VariableDeclaration(NodeBase):
    declarations: tuple[VariableDeclarator, ...]
    kind: str = "var"


@dataclass(frozen=True, eq=False)
class Expression(NodeBase):
    """
    any node outside the pattern grammar, tagged with its ESTree kind.

    initializers are represented this way, and so are unsupported patterns
    such as RestElement or AssignmentPattern.
    """

    kind: str

    @property
    def type(self) -> str:
        return self.kind

    def __rich_repr__(self) -> rich.repr.Result:
        yield self.kind
        yield from super().__rich_repr__()


Node = (
    Identifier
    | Literal
    | ObjectPattern
    | Property
    | ArrayPattern
    | VariableDeclarator
    | VariableDeclaration
    | Expression
)

################################################################################
# scope metadata


@dataclass(eq=False)
class Reference:
    identifier: Identifier
    # the declaring occurrence of a declarator with an initializer
    init: bool = False
    write: bool = False
    # `{ a }` in an object literal, where `a` is both key and value
    shorthand: bool = False

    def is_write(self) -> bool:
        return self.write

    def __rich_repr__(self) -> rich.repr.Result:
        yield self.identifier
        yield "init", self.init, False
        yield "write", self.write, False


@dataclass(eq=False)
class Definition:
    name: Identifier
    parent: VariableDeclaration


@dataclass(eq=False)
class Variable:
    name: str
    defs: list[Definition] = field(default_factory=lambda: [])
    identifiers: list[Identifier] = field(default_factory=lambda: [])
    references: list[Reference] = field(default_factory=lambda: [])

    def __rich_repr__(self) -> rich.repr.Result:
        yield self.name
        yield "defs", len(self.defs)
        yield "references", len(self.references)

from ._binding import Binding
from ._diagnostic import UnexpectedNodeType
from ._nodes import Expression
from ._nodes import Literal
from ._nodes import Node
from ._patcher import Patcher

# expressions that change meaning when directly followed by `.x` or `[x]`.
# deliberately narrow: conditional, logical, arrow etc are not wrapped
_NEEDS_PARENS = ("BinaryExpression", "SequenceExpression")


def build_replacement(binding: Binding, patcher: Patcher) -> str:
    """Build a replacement string for a binding."""
    init = binding.init
    ans = patcher.slice(init.start, init.end) if init is not None else "undefined"
    if needs_parens(init):
        ans = f"({ans})"

    for access in binding.accesses:
        key = source_of(access.key, patcher)
        if access.computed:
            ans = f"{ans}[{key}]"
        else:
            ans = f"{ans}.{key}"
    return ans


def needs_parens(node: Node | None) -> bool:
    return isinstance(node, Expression) and node.kind in _NEEDS_PARENS


def source_of(node: Node, patcher: Patcher) -> str:
    if node.has_position:
        return patcher.slice(node.start, node.end)
    if isinstance(node, Literal):
        return node.raw
    raise UnexpectedNodeType(f"unable to get source of {node.type} node", node)

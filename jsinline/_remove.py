from __future__ import annotations

import logging
from typing import TypeVar

from ._binding import Binding
from ._diagnostic import UnexpectedNodeType
from ._nodes import ArrayPattern
from ._nodes import Identifier
from ._nodes import Node
from ._nodes import ObjectPattern
from ._nodes import Property
from ._nodes import VariableDeclaration
from ._nodes import VariableDeclarator
from ._patcher import Patcher
from ._utils import index_by_id

T = TypeVar("T", bound=Node)


def remove_binding(binding: Binding, patcher: Patcher) -> None:
    """
    Remove the binding identifier and all its parents that can be removed. For
    example, if `a` is removed in `let a = 0;` then the entire declaration will
    be removed.
    """
    parents = binding.parents
    for i, node in enumerate(parents):
        if isinstance(node, (Identifier, Property, VariableDeclarator)):
            # removed by the container one level up
            continue

        if isinstance(node, ObjectPattern):
            prop = _expect_child(parents, i, Property)
            remove_list_element(patcher.live(node.properties), prop, patcher)
            if len(patcher.live(node.properties)) > 0:
                return

        elif isinstance(node, ArrayPattern):
            # leaves a hole so that the indices of siblings stay valid
            element = parents[i - 1]
            patcher.remove(element.start, element.end)
            patcher.mark_removed(element)
            if len(patcher.live(node.elements)) > 0:
                return

        elif isinstance(node, VariableDeclaration):
            declarator = _expect_child(parents, i, VariableDeclarator)
            remove_list_element(patcher.live(node.declarations), declarator, patcher)
            if len(patcher.live(node.declarations)) > 0:
                return
            remove_statement(node, patcher)
            return

        else:
            raise UnexpectedNodeType(f"unexpected parent type: {node.type}", node)


def _expect_child(parents: tuple[Node, ...], i: int, typ: type[T]) -> T:
    child = parents[i - 1]
    if not isinstance(child, typ):
        raise UnexpectedNodeType(
            f"BUG: parent before {parents[i].type} must be `{typ.__name__}`, but got `{child.type}`",
            child,
        )
    return child


def remove_list_element(live: list[Node], element: Node, patcher: Patcher) -> None:
    """
    Remove a node from a list and its representation in the source code.

    the first element takes the separator after it; any other element takes
    the separator before it.
    """
    index = index_by_id(element, live)
    if index == 0:
        if len(live) > 1:
            patcher.remove(element.start, live[1].start)
    else:
        patcher.remove(live[index - 1].end, element.end)
    patcher.mark_removed(element)


def remove_statement(node: Node, patcher: Patcher) -> None:
    """
    Remove an entire statement and, if it was the only non-whitespace on the
    line, the whole line.
    """
    start, end = removable_range_for_statement(node, patcher.original)
    logging.debug(f"removing statement {node.type} as [{start}, {end})")
    patcher.remove(start, end)
    patcher.mark_removed(node)


def removable_range_for_statement(node: Node, source: str) -> tuple[int, int]:
    start_of_line = start_of_line_preceding_index_with_only_spaces(source, node.start)
    end_of_line = end_of_line_succeeding_index_with_only_spaces(source, node.end)

    if start_of_line is not None and end_of_line is not None:
        return start_of_line, end_of_line
    return node.start, node.end


def start_of_line_preceding_index_with_only_spaces(source: str, index: int) -> int | None:
    """Find the start of the line where the text before `index` is only whitespace."""
    for i in range(index - 1, -1, -1):
        c = source[i]
        if c in " \t":
            continue
        if c in "\r\n":
            return i + 1
        return None
    return 0


def end_of_line_succeeding_index_with_only_spaces(source: str, index: int) -> int | None:
    """Find the end of the line where the text from `index` on is only whitespace."""
    for i in range(index, len(source)):
        c = source[i]
        if c in " \t":
            continue
        if c == "\r":
            if source[i + 1 : i + 2] == "\n":
                return i + 2
            return i + 1
        if c == "\n":
            return i + 1
        return None
    return len(source)

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from types import TracebackType
from typing import Any
from typing import ClassVar
from typing import Iterator
from typing import Never
from typing import Self

from rich import print as print  # autoflake: skip
from rich.console import Group
from rich.console import RenderableType
from rich.panel import Panel
from rich.text import Text
from rich.traceback import Stack
from rich.traceback import Trace
from rich.traceback import Traceback

from ._utils import Cell
from .config import RICH_SPINNER
from .config import _status_text
from .config import verbose


class SuppressExit(Exception):
    """
    exception indicating that caller should exit with code without showing a backtrace
    """

    def __init__(self, code: int):
        self.code = code


def get_trace(depth: int = 0) -> Trace:
    frame = sys._getframe(depth + 1)

    # see
    # https://github.com/Textualize/rich/discussions/1531
    tb = None
    while True:
        tb = TracebackType(tb, frame, frame.f_lasti, frame.f_lineno)
        frame = frame.f_back
        if frame is None:
            break

    ex = BaseException("_tmp")
    ans = Traceback.extract(type(ex), ex, tb)
    (stack,) = ans.stacks
    stack.exc_type = ""
    stack.exc_value = ""
    return ans


def format_backtrace(trace: Trace, max_frames: int = 100):
    stack = Stack("", "", frames=trace.stacks[0].frames[-max_frames:])
    return Traceback(trace)._render_stack(stack)


def describe_range(source: str, start: int, end: int) -> Text:
    """one line of source, with [start, end) highlighted"""
    if start < 0:
        return Text("<no source position>", "js.range")
    line_start = source.rfind("\n", 0, start) + 1
    line_end = source.find("\n", start)
    if line_end == -1:
        line_end = len(source)
    lineno = source.count("\n", 0, start) + 1

    ans = Text()
    ans.append(f"{lineno}:{start - line_start + 1}: ", "js.linenum")
    ans.append(source[line_start:start])
    ans.append(source[start : min(end, line_end)], "bold underline")
    ans.append(source[min(end, line_end) : line_end])
    return ans


################################################################################


_PENDING_ERRORS: Cell[list[Report]] = Cell([])


def show_pending_diagnostics():
    pending = _PENDING_ERRORS.value
    _PENDING_ERRORS.value = []
    for x in pending:
        x.show()


def mk_warn(
    msg: str | Text,
    first: RenderableType | None = None,
    *parts: RenderableType,
) -> Report:
    txt = Text("", style="logging.level.warning")
    txt += Text("[WARN] ", style="bold")
    txt += msg
    return Report.new(
        Group(txt, first) if first is not None else txt,
        *parts,
        border_style="logging.level.warning",
    )


def mk_error(
    msg: str | Text,
    first: RenderableType | None = None,
    *parts: RenderableType,
) -> Report:
    txt = Text("", style="logging.level.error")
    txt += Text("[ERROR] ", style="bold")
    txt += msg
    return Report.new(
        Group(txt, first) if first is not None else txt,
        *parts,
        border_style="logging.level.error",
    )


@dataclass
class Report:
    # internal part of bt (bt of line that created the report)
    trace: Trace | None
    parts: list[RenderableType]

    border_style: str = "traceback.border"
    did_show: bool = False

    @staticmethod
    def new(
        *parts: RenderableType,
        border_style: str = "traceback.border",
        depth: int = 0,
    ) -> Report:
        logging.info(f"created diagnostic report: {_status_text()}")
        ans = Report(
            trace=get_trace(depth + 1) if verbose.value >= 2 else None,
            border_style=border_style,
            parts=list(parts),
        )
        _PENDING_ERRORS.value.append(ans)
        return ans

    @staticmethod
    def from_ex(e: BaseException) -> Report:
        txt = Text("internal error:", style="logging.level.error")
        tb = Traceback.from_exception(type(e), e, e.__traceback__)
        return Report(get_trace(), [Group(txt, tb)])

    def add(self, *parts: RenderableType) -> Self:
        self.parts.append(Group(*parts))
        return self

    def note(self, msg: str, *parts: RenderableType) -> Self:
        txt = Text()
        txt.append("[NOTE] ", style="traceback.note")
        self.add(txt + Text(msg), *parts)
        return self

    def fatal(self) -> Never:
        show_pending_diagnostics()
        self.show()
        raise SuppressExit(1) from None

    def __rich__(self) -> RenderableType:
        def gen():
            yield self.parts[0]
            for x in self.parts[1:]:
                yield ""
                yield x
            if self.trace is not None:
                yield ""
                yield Text("Traceback (most recent call last)", style="traceback.title")
                yield format_backtrace(self.trace)

        return Panel(Group(*gen()), border_style=self.border_style)

    def show(self) -> None:
        if self.did_show:
            return
        if status := RICH_SPINNER.get():
            status.stop()
            try:
                print(self)
            finally:
                status.start()
        else:
            print(self)
        self.did_show = True


################################################################################


class ErrorKind(Enum):
    MultipleDefinitions = "MultipleDefinitions"
    NoMatchingBinding = "NoMatchingBinding"
    ReferenceRemoved = "ReferenceRemoved"
    UnexpectedNodeType = "UnexpectedNodeType"
    VariableIsMutated = "VariableIsMutated"

    @property
    def recoverable(self) -> bool:
        """
        recoverable errors are refusals on valid input; the caller can skip the
        variable. the rest are defects or unsupported syntax.
        """
        return self in (
            ErrorKind.MultipleDefinitions,
            ErrorKind.ReferenceRemoved,
            ErrorKind.VariableIsMutated,
        )


class InlineError(Exception):
    kind: ClassVar[ErrorKind]

    def __init__(self, msg: str, node: Any = None):
        super().__init__(msg)
        self.msg = msg
        # node or Variable the error is about, if any
        self.node = node

    @property
    def recoverable(self) -> bool:
        return self.kind.recoverable

    def report(self, source: str | None = None) -> Report:
        mk = mk_warn if self.recoverable else mk_error
        ans = mk(self.msg)
        start: int | None = getattr(self.node, "start", None)
        end: int | None = getattr(self.node, "end", None)
        if source is not None and start is not None and end is not None:
            ans.note("at", describe_range(source, start, end))
        if not self.recoverable:
            ans.note("this is an unsupported input or an internal error, not a user error")
        return ans


class MultipleDefinitions(InlineError):
    kind = ErrorKind.MultipleDefinitions


class NoMatchingBinding(InlineError):
    kind = ErrorKind.NoMatchingBinding


class ReferenceRemoved(InlineError):
    kind = ErrorKind.ReferenceRemoved


class UnexpectedNodeType(InlineError):
    kind = ErrorKind.UnexpectedNodeType


class VariableIsMutated(InlineError):
    kind = ErrorKind.VariableIsMutated


@contextmanager
def catch_ex_and_exit(source: str | None = None) -> Iterator[None]:
    try:
        yield
    except SuppressExit:
        raise
    except Exception as e:
        if isinstance(e, InlineError):
            report = e.report(source)
        else:
            report = Report.from_ex(e)
        report.fatal()

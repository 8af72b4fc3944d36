import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING
from typing import Annotated
from typing import Any
from typing import Callable
from typing import Iterator

import cappa
import rich.status
import rich.traceback
from cappa import Arg
from cappa import ArgAction
from rich import print as rich_print
from rich.console import Console
from rich.logging import RichHandler

from ._theme import theme
from ._utils import Cell

if TYPE_CHECKING:
    from rich.console import Console as reconfigure
else:
    from rich import reconfigure

# 0: warnings only
# 1: which variable is inlined as what, and the edits at the end
# 2: backtraces on diagnostic reports
# 3: every patch and scope lookup
verbose: Cell[int] = Cell(0)

console_width: Cell[int | None] = Cell(None)
# everything printed to the terminal is appended here too
log_file: Cell[Path | None] = Cell(None)

################################################################################

# what is being worked on, e.g. "main.js > Inline > inline a"
_status_stack: Cell[list[str]] = Cell([])
status_hook: Cell[Callable[[str], None] | None] = Cell(None)


def _status_text() -> str:
    return " > ".join(_status_stack.value)


@contextmanager
def with_status(text: str) -> Iterator[None]:
    with _status_stack.bind(_status_stack.value + [text]):
        current = _status_text()
        logging.debug(f"status: {current}")
        if hook := status_hook.get():
            hook(current)
        yield


RICH_SPINNER: Cell[rich.status.Status] = Cell()


@contextmanager
def with_rich_spinner() -> Iterator[None]:
    """show the innermost with_status on a spinner line while inside"""
    with (
        rich.status.Status("") as status,
        RICH_SPINNER.bind(status),
        status_hook.bind(status.update),
    ):
        yield


################################################################################


def _log_level() -> int:
    if verbose.value >= 3:
        return logging.DEBUG
    if verbose.value >= 1:
        return logging.INFO
    return logging.WARN


def console_setup() -> None:
    """
    route logging through rich and apply the theme.

    called again by every test, so existing handlers are replaced.
    """
    logging.basicConfig(
        level=_log_level(),
        format="%(message)s",
        handlers=[RichHandler(show_time=False, show_path=verbose.value >= 3)],
        force=True,
    )

    if f := log_file.value:
        f.write_text("")

    reconfigure(theme=theme, width=console_width.value)
    if verbose.value >= 2:
        rich.traceback.install()


def print(*objects: Any, sep: str = " ", end: str = "\n") -> None:
    rich_print(*objects, sep=sep, end=end)

    if f := log_file.value:
        with f.open("a") as stream:
            console = Console(file=stream, theme=theme, width=console_width.value or 100)
            console.print(*objects, sep=sep, end=end)


################################################################################

cappa_group = cappa.Group(name="Output", section=2)


@dataclass
class Config:
    verbose: Annotated[
        int,
        Arg(short="-v", count=True, group=cappa_group, propagate=True, show_default=False),
        Arg(long="--verbosity", group=cappa_group, propagate=True),
    ] = 0
    """ -v logs each inline and shows the edits, -vvv logs every patch """

    quiet: Annotated[
        int,
        Arg(short="-q", action=ArgAction.count, group=cappa_group, propagate=True),
    ] = 0

    width: Annotated[
        int | None,
        Arg(long=True, group=cappa_group, propagate=True),
    ] = None
    """ terminal width for printing """

    output: Annotated[
        Path | None,
        Arg(long=True, short=True, group=cappa_group, propagate=True),
    ] = None
    """ also write everything printed to this file """

    def set_vars(self) -> None:
        verbose.value = self.verbose - self.quiet
        console_width.value = self.width
        log_file.value = self.output

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Annotated
from typing import Never

import cappa
from cappa import Arg
from cappa import Destructured
from rich.rule import Rule
from rich.text import Text

from ._api import inline_variables
from ._diagnostic import SuppressExit
from ._diagnostic import catch_ex_and_exit
from ._diagnostic import show_pending_diagnostics
from ._frontend import analyze_module
from .config import Config
from .config import console_setup
from .config import print as print
from .config import verbose
from .config import with_rich_spinner
from .config import with_status


@cappa.command(name="jsinline")
@dataclass
class Cli:
    """inline module level javascript variables into their uses"""

    file: Path
    """the javascript file"""

    names: list[str]
    """variables to inline, in order"""

    in_place: Annotated[bool, Arg(short="-i", long="--in-place")] = False
    """rewrite the file instead of printing the result"""

    validate: Annotated[bool, Arg(long=True)] = False
    """look for writes before editing anything"""

    keep_going: Annotated[bool, Arg(short="-k", long="--keep-going")] = False
    """skip variables that can not be inlined instead of failing"""

    config: Annotated[Destructured[Config], Arg(hidden=True)] = field(default_factory=Config)

    def call(self) -> Never:
        self.config.set_vars()
        console_setup()

        try:
            self.run()
        except SuppressExit as e:
            exit(e.code)

        exit(0)

    def run(self) -> None:
        source = self.file.read_text()

        with catch_ex_and_exit(source):
            with with_rich_spinner(), with_status(self.file.name):
                with with_status("Analyze"):
                    scope = analyze_module(source)

                missing = [x for x in self.names if x not in scope]
                if missing:
                    print(f"not module level variables: {missing}")
                    print("available variables:", [v.name for v in scope.variables])
                    raise SuppressExit(2)

                with with_status("Inline"):
                    patcher = inline_variables(
                        scope, self.names, validate=self.validate, skip_errors=self.keep_going
                    )

        show_pending_diagnostics()

        if verbose.value >= 1:
            print(Rule(title=Text("Edits:", "js.title")))
            print(patcher)

        output = patcher.to_string()
        if self.in_place:
            self.file.write_text(output)
            return

        print(Rule(title=Text("Output:", "js.title")))
        print(Text(output, end=""))
        print(Rule())


def main():
    cli = cappa.parse(Cli)
    return cli.call()

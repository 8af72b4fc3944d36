from __future__ import annotations

from typing import Iterable

from ._diagnostic import InlineError
from ._frontend import ModuleScope
from ._frontend import analyze_module
from ._inline import inline
from ._patcher import Patcher


def inline_variables(
    scope: ModuleScope,
    names: Iterable[str],
    patcher: Patcher | None = None,
    *,
    validate: bool = False,
    skip_errors: bool = False,
) -> Patcher:
    """
    inline each of names in turn, sharing one patcher.

    with skip_errors, variables that cannot be inlined (multiple definitions,
    written to, used inside code an earlier inline removed) are reported as
    warnings and left alone. skipping implies validate, since a later variable
    must not see a half rewritten one.
    """
    if patcher is None:
        patcher = Patcher(scope.source)

    for name in names:
        variable = scope.variable(name)
        try:
            inline(variable, patcher, validate=validate or skip_errors)
        except InlineError as e:
            if not (skip_errors and e.recoverable):
                raise
            e.report(scope.source).note(f"`{name}` was left as is")
    return patcher


def inline_source(source: str, names: Iterable[str], *, validate: bool = False) -> str:
    return inline_variables(analyze_module(source), names, validate=validate).to_string()

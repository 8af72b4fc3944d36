import logging

from ._binding import Binding
from ._binding import get_binding_for_variable
from ._nodes import Variable
from ._patcher import Patcher
from ._references import check_references
from ._references import replace_references
from ._remove import remove_binding
from ._replacement import build_replacement
from .config import with_status


def inline(variable: Variable, patcher: Patcher, *, validate: bool = False) -> Binding:
    """
    Inline all references to a variable by replacing them with its initial value.

    with validate=True, references are checked before anything is edited, so
    VariableIsMutated or ReferenceRemoved leave the patcher untouched.
    otherwise the declaration is already removed and some references may
    already be rewritten when they are raised.
    """
    with with_status(f"inline {variable.name}"):
        binding = get_binding_for_variable(variable)
        if validate:
            check_references(variable, patcher)
        replacement = build_replacement(binding, patcher)
        logging.info(f"inlining `{variable.name}` as `{replacement}`")
        remove_binding(binding, patcher)
        replace_references(variable, replacement, patcher)
        return binding

from ._diagnostic import ReferenceRemoved
from ._diagnostic import VariableIsMutated
from ._nodes import Reference
from ._nodes import Variable
from ._patcher import Patcher


def _mutated(variable: Variable, reference: Reference) -> VariableIsMutated:
    return VariableIsMutated(
        f"variable `{variable.name}` is written to, cannot inline", reference.identifier
    )


def _removed(variable: Variable, reference: Reference) -> ReferenceRemoved:
    return ReferenceRemoved(
        f"a reference to `{variable.name}` is inside code that was already removed, "
        "inline it before the variable that uses it",
        reference.identifier,
    )


def _in_removed_code(reference: Reference, patcher: Patcher) -> bool:
    return patcher.overlaps_removal(reference.identifier.start, reference.identifier.end)


def check_references(variable: Variable, patcher: Patcher | None = None) -> None:
    """
    raise VariableIsMutated if any reference writes to variable, and
    ReferenceRemoved if any reference sits in text patcher already removed.

    replace_references finds the same problems, but only after overwriting the
    references that come before them.
    """
    for reference in variable.references:
        if reference.init:
            continue
        if reference.is_write():
            raise _mutated(variable, reference)
        if patcher is not None and _in_removed_code(reference, patcher):
            raise _removed(variable, reference)


def replace_references(variable: Variable, replacement: str, patcher: Patcher) -> None:
    """Replace all references to a variable with a particular string."""
    for reference in variable.references:
        if reference.init:
            continue

        if reference.is_write():
            raise _mutated(variable, reference)
        if _in_removed_code(reference, patcher):
            raise _removed(variable, reference)

        identifier = reference.identifier
        if reference.shorthand:
            # `{ a }` becomes `{ a: value }`. a plain overwrite would give
            # `{ value }`, which is not an object literal entry.
            patcher.overwrite(identifier.start, identifier.end, f"{identifier.name}: {replacement}")
        else:
            patcher.overwrite(identifier.start, identifier.end, replacement)

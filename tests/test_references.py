import pytest

from jsinline import Identifier
from jsinline import Patcher
from jsinline import Reference
from jsinline import ReferenceRemoved
from jsinline import Variable
from jsinline import VariableIsMutated
from jsinline import analyze_module
from jsinline import check_references
from jsinline import inline
from jsinline import replace_references
from test_utils import ident_at
from test_utils import run_source

SOURCE = "a; use(a); a = 2; use(a);"


def _variable() -> Variable:
    refs = [Reference(ident_at(SOURCE, "a", i)) for i in range(4)]
    refs[0] = Reference(refs[0].identifier, init=True, write=True)
    refs[2] = Reference(refs[2].identifier, write=True)
    return Variable("a", references=refs)


def test_skips_init_and_overwrites_reads():
    source = "a; use(a);"
    refs = [
        Reference(ident_at(source, "a", 0), init=True, write=True),
        Reference(ident_at(source, "a", 1)),
    ]
    patcher = Patcher(source)
    replace_references(Variable("a", references=refs), "42", patcher)
    assert patcher.to_string() == "a; use(42);"


def test_write_is_not_rolled_back():
    patcher = Patcher(SOURCE)
    with pytest.raises(VariableIsMutated):
        replace_references(_variable(), "42", patcher)
    # the read before the write was already rewritten
    assert patcher.to_string() == "a; use(42); a = 2; use(a);"


def test_check_references_touches_nothing():
    with pytest.raises(VariableIsMutated) as info:
        check_references(_variable())
    assert info.value.recoverable
    assert isinstance(info.value.node, Identifier)
    assert info.value.node.start == SOURCE.index("a = 2")


def test_validate_leaves_patcher_untouched():
    source = "let a = 1;\nuse(a);\na++;\n"
    scope = analyze_module(source)
    patcher = Patcher(source)
    with pytest.raises(VariableIsMutated):
        inline(scope.variable("a"), patcher, validate=True)
    assert not patcher.has_changed()


def test_without_validate_edits_remain():
    source = "let a = 1;\nuse(a);\na++;\n"
    scope = analyze_module(source)
    patcher = Patcher(source)
    with pytest.raises(VariableIsMutated):
        inline(scope.variable("a"), patcher)
    assert patcher.to_string() == "use(1);\na++;\n"


def test_shorthand_property():
    source = "const a = 1;\nuse({ a });\n"
    assert run_source(source) == "use({ a: 1 });\n"


@pytest.mark.parametrize(
    "source",
    [
        "const a = 1;\nconst b = a + 2;\nuse(b);\n",
        "var a = 1, b = a;\nuse(b);\n",
    ],
)
def test_reference_inside_removed_declaration(source: str):
    with pytest.raises(ReferenceRemoved, match="inline it before the variable that uses it") as info:
        run_source(source, "b", "a")
    assert info.value.recoverable


def test_validate_catches_removed_reference_before_editing():
    source = "const a = 1;\nconst b = a + 2;\nuse(b);\n"
    scope = analyze_module(source)
    patcher = Patcher(source)
    inline(scope.variable("b"), patcher)
    after_b = patcher.to_string()
    assert after_b == "const a = 1;\nuse((a + 2));\n"

    with pytest.raises(ReferenceRemoved):
        inline(scope.variable("a"), patcher, validate=True)
    assert patcher.to_string() == after_b


def test_inlining_in_dependency_order_works():
    source = "const a = 1;\nconst b = a + 2;\nuse(b);\n"
    assert run_source(source, "a", "b") == "use((1 + 2));\n"

import pytest

from jsinline import ParseError
from jsinline import analyze_module
from test_utils import run_source


def _refs(source: str, name: str) -> list[tuple[int, bool, bool]]:
    v = analyze_module(source).variable(name)
    return [(r.identifier.start, r.init, r.is_write()) for r in v.references]


def test_module_variables_in_declaration_order():
    scope = analyze_module("var a = 1;\nexport const b = 2;\nlet { c, d: [e] } = o;\nfunction f() { var g; }\n")
    assert [v.name for v in scope.variables] == ["a", "b", "c", "e"]
    assert "g" not in scope
    with pytest.raises(KeyError):
        scope.variable("f")


def test_declaration_and_identifiers_are_shared():
    scope = analyze_module("const { a, b } = o;\n")
    a = scope.variable("a")
    b = scope.variable("b")
    assert a.defs[0].parent is b.defs[0].parent
    assert a.identifiers[0] is a.defs[0].name


def test_init_reference_only_with_initializer():
    assert _refs("let a = 1;\nuse(a);\n", "a") == [(4, True, True), (15, False, False)]
    assert _refs("let a;\nuse(a);\n", "a") == [(11, False, False)]


@pytest.mark.parametrize(
    "statement",
    [
        "a = 2;",
        "a += 2;",
        "a++;",
        "--a;",
        "[a] = xs;",
        "({ a } = o);",
        "({ k: a } = o);",
        "for (a of xs) {}",
    ],
)
def test_writes(statement: str):
    refs = _refs(f"let a = 1;\n{statement}\n", "a")
    assert [w for (_, init, w) in refs if not init] == [True]


@pytest.mark.parametrize(
    "statement",
    [
        "b = a;",
        "o[a] = 1;",
        "o.a = 1;",
        "({ [a]: b } = o);",
        "({ b = a } = o);",
        "f(a++ === 0 ? 1 : 2, a);",
    ],
)
def test_reads(statement: str):
    refs = _refs(f"let a = 1;\n{statement}\n", "a")
    writes = [w for (_, init, w) in refs if not init]
    if statement.startswith("o.a"):
        assert writes == []
    elif "a++" in statement:
        assert writes == [True, False]
    else:
        assert writes == [False]


@pytest.mark.parametrize(
    "inner",
    [
        "function f(a) { return a; }",
        "const f = (a) => a;",
        "const f = a => a;",
        "{ let a = 2; use(a); }",
        "try {} catch (a) { use(a); }",
        "for (const a of xs) use(a);",
        "function f() { var a = 2; use(a); }",
        "class C { m(a) { return a; } }",
    ],
)
def test_shadowed_names_are_not_references(inner: str):
    source = f"const a = 1;\n{inner}\nuse(a);\n"
    assert run_source(source, "a") == f"{inner}\nuse(1);\n"


def test_closure_sees_module_variable():
    source = "const a = 1;\nfunction f() { return a; }\n"
    assert run_source(source) == "function f() { return 1; }\n"


def test_imports_are_not_variables():
    scope = analyze_module("import x from 'x';\nimport { y as z } from 'y';\nconst a = x;\n")
    assert [v.name for v in scope.variables] == ["a"]


def test_export_alias_is_not_a_reference():
    source = "const b = 2;\nconst a = 1;\nexport { a as b };\n"
    assert _refs(source, "b") == [(6, True, True)]
    assert _refs(source, "a") == [(19, True, True), (35, False, False)]
    assert run_source(source, "b") == "const a = 1;\nexport { a as b };\n"


def test_unicode_offsets():
    source = "const s = 'héllo wörld';\nconst a = 1;\nuse(a, s);\n"
    assert run_source(source, "a") == "const s = 'héllo wörld';\nuse(1, s);\n"
    assert run_source(source, "s") == "const a = 1;\nuse(a, 'héllo wörld');\n"


def test_syntax_error():
    with pytest.raises(ParseError, match="syntax error"):
        analyze_module("const = ;\n")

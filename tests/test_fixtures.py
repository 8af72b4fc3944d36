import pytest

from jsinline import MultipleDefinitions
from jsinline import VariableIsMutated
from test_utils import check_fixture
from test_utils import fixture_source
from test_utils import run_source


def test_multiple_references():
    actual, expected = check_fixture("multiple-references")
    assert actual == expected


def test_no_references():
    actual, expected = check_fixture("no-references")
    assert actual == expected


def test_multiple_definitions():
    with pytest.raises(MultipleDefinitions, match="multiple definitions for `a` found, cannot inline"):
        run_source(fixture_source("multiple-definitions"))


def test_write_references():
    with pytest.raises(VariableIsMutated, match="variable `a` is written to, cannot inline"):
        run_source(fixture_source("write-references"))


@pytest.mark.parametrize(
    "fixture,name",
    [
        ("multiple-declarators-first", "a"),
        ("multiple-declarators-middle", "b"),
        ("multiple-declarators-last", "c"),
        ("multiple-declarators-middle-multiline", "PI"),
    ],
)
def test_remove_declarator(fixture: str, name: str):
    actual, expected = check_fixture(fixture, name)
    assert actual == expected


def test_multiple_inline():
    actual, expected = check_fixture("multiple-inline", "a", "b")
    assert actual == expected


def test_declaration_removed_a_piece_at_a_time():
    actual, expected = check_fixture("multiple-declarators-inline-all", "a", "b")
    assert actual == expected


def test_needs_parens():
    actual, expected = check_fixture("needs-parens", "a", "b")
    assert actual == expected


def test_no_init():
    actual, expected = check_fixture("no-init")
    assert actual == expected


def test_object_destructuring_simple():
    actual, expected = check_fixture("object-destructuring-simple")
    assert actual == expected


def test_object_destructuring_alias():
    actual, expected = check_fixture("object-destructuring-alias")
    assert actual == expected


def test_object_destructuring_nested():
    actual, expected = check_fixture("object-destructuring-nested")
    assert actual == expected


def test_object_destructuring_computed():
    actual, expected = check_fixture("object-destructuring-computed", "value")
    assert actual == expected


def test_object_destructuring_remove_property():
    actual, expected = check_fixture("object-destructuring-remove-property", "a")
    assert actual == expected


def test_object_destructuring_remove_nested_property():
    actual, expected = check_fixture("object-destructuring-remove-nested-property", "b")
    assert actual == expected


def test_array_destructuring_simple():
    actual, expected = check_fixture("array-destructuring-simple", "a")
    assert actual == expected


def test_mixed_array_object_destructuring():
    actual, expected = check_fixture("mixed-array-object-destructuring", "b", "d")
    assert actual == expected


def test_for_header_declaration():
    actual, expected = check_fixture("for-header-declaration", "i")
    assert actual == expected


def test_for_header_declarator_list():
    source = "for (var i = 0, n = 3; i < n; ) {}\n"
    assert run_source(source, "n") == "for (var i = 0; i < 3; ) {}\n"
    assert run_source(source, "i") == "for (var n = 3; 0 < n; ) {}\n"

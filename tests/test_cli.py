from pathlib import Path

import cappa
import pytest

from jsinline._cli import Cli


def _run(*argv: str) -> int:
    cli = cappa.parse(Cli, argv=list(argv))
    with pytest.raises(SystemExit) as info:
        cli.call()
    return info.value.code  # pyright: ignore


def test_in_place(tmp_path: Path):
    f = tmp_path / "main.js"
    f.write_text("const { a, b } = obj;\nuse(a);\nuse(b);\n")

    assert _run(str(f), "a", "-i") == 0
    assert f.read_text() == "const { b } = obj;\nuse(obj.a);\nuse(b);\n"


def test_keep_going_skips_mutated(tmp_path: Path):
    f = tmp_path / "main.js"
    f.write_text("let a = 1;\nlet b = 2;\na++;\nuse(a, b);\n")

    assert _run(str(f), "a", "b", "-i", "--keep-going") == 0
    assert f.read_text() == "let a = 1;\na++;\nuse(a, 2);\n"


def test_mutated_is_fatal(tmp_path: Path):
    f = tmp_path / "main.js"
    source = "let a = 1;\na++;\n"
    f.write_text(source)

    assert _run(str(f), "a", "-i") == 1
    assert f.read_text() == source


def test_unknown_name(tmp_path: Path):
    f = tmp_path / "main.js"
    f.write_text("let a = 1;\n")

    assert _run(str(f), "nope", "-i") == 2


def test_keep_going_skips_reference_in_removed_code(tmp_path: Path):
    f = tmp_path / "main.js"
    f.write_text("const a = 1;\nconst b = a + 2;\nuse(b);\n")

    assert _run(str(f), "b", "a", "-i", "-k") == 0
    assert f.read_text() == "const a = 1;\nuse((a + 2));\n"

"""Tests for stub serialization: nesting, where-type splitting and comment wrapping."""

from sml_stubgen.config import StubgenConfig
from sml_stubgen.emitter import Emitter, emit
from sml_stubgen.schemas import (
    AnnotatedDeclaration,
    ReconciliationDiagnostics,
    StubFile,
    WarningKind,
)


def stub(*declarations, **kwargs) -> StubFile:
    kwargs.setdefault("signature_name", "signature S")
    return StubFile(
        name="s",
        declarations=[
            d if isinstance(d, AnnotatedDeclaration) else AnnotatedDeclaration(declaration=d)
            for d in declarations
        ],
        **kwargs,
    )


def test_embedded_signature_is_indented():
    result = emit(stub("structure Inner : sig", "val x : int", "end", "val y : bool"))

    assert result.text.split("\n") == [
        "signature S = sig",
        "  structure Inner : sig",
        "    val x : int",
        "  end",
        "  val y : bool",
        "end",
        "",
    ]
    assert result.warnings == []


def test_where_type_clauses_go_on_continuation_lines():
    result = emit(stub("structure A : ORD where type t = int where type u = bool"))

    assert result.text.split("\n")[1:4] == [
        "  structure A : ORD",
        "    where type t = int",
        "    where type u = bool",
    ]


def test_declaration_prose_becomes_comment():
    result = emit(stub(AnnotatedDeclaration(declaration="val x : int", prose="the value x")))

    assert result.text.split("\n")[:6] == [
        "signature S = sig",
        "  (*!",
        "   * the value x",
        "   *)",
        "  val x : int",
        "end",
    ]


def test_description_paragraphs_and_auxiliary_names():
    result = emit(stub(
        "val x : int",
        description_paragraphs=["First.", "Second."],
        auxiliary_names=["structure S : S", "functor F (A : B) : S where type t = A.t"],
    ))

    assert result.text == "\n".join([
        "(*!",
        " * First.",
        "",
        " * Second.",
        " *)",
        "signature S = sig",
        "  val x : int",
        "end",
        "",
        "structure S : S = struct end",
        "functor F (A : B) : S",
        "  where type t = A.t = struct end",
        "",
    ])


def test_comment_wrapping_respects_width():
    words = [f"word{i}" for i in range(60)] + ["a-rather-long-hyphenated-word"]
    paragraph = " ".join(words)
    emitter = Emitter(StubgenConfig(max_line_width=40))
    lines: list[str] = []

    emitter.write_comment(lines, "    ", [paragraph])

    assert lines[0] == "    (*!"
    assert lines[-1] == "     *)"
    body = lines[1:-1]
    assert all(len(line) <= 40 for line in body)
    assert all(line.startswith("     * ") for line in body)
    assert " ".join(line[len("     * "):] for line in body) == paragraph


def test_overlong_word_gets_its_own_line():
    emitter = Emitter(StubgenConfig(max_line_width=10))
    lines: list[str] = []

    emitter.write_comment(lines, "", ["a supercalifragilistic b"])

    assert lines == ["(*!", " * a", " * supercalifragilistic", " * b", " *)"]


def test_comments_can_be_disabled():
    result = Emitter(StubgenConfig(emit_comments=False)).emit(stub(
        AnnotatedDeclaration(declaration="val x : int", prose="doc"),
        description_paragraphs=["page doc"],
    ))

    assert result.text == "signature S = sig\n  val x : int\nend\n"


def test_declarations_without_signature_warn():
    result = emit(stub("val x : int", signature_name=None, auxiliary_names=["structure X : X"]))

    assert result.text == "\nstructure X : X = struct end\n"
    assert [w.kind for w in result.warnings] == [WarningKind.DECLARATIONS_WITHOUT_SIGNATURE]


def test_unbalanced_end_is_clamped_and_reported():
    result = emit(stub("val x : int", "end", "val y : int"))

    assert result.text.split("\n")[:5] == [
        "signature S = sig",
        "  val x : int",
        "  end",
        "  val y : int",
        "end",
    ]
    assert [w.kind for w in result.warnings] == [WarningKind.UNBALANCED_NESTING]


def test_unclosed_sub_signature_is_reported():
    result = emit(stub("structure Inner : sig", "val x : int"))

    assert result.warnings[0].kind is WarningKind.UNBALANCED_NESTING
    assert result.warnings[0].data == {"open": 1}


def test_identifier_ending_in_end_does_not_close_a_level():
    result = emit(stub("structure Inner : sig", "val append", "end"))

    assert result.text.split("\n")[2] == "    val append"
    assert result.warnings == []


def test_diagnostics_become_warnings():
    diagnostics = ReconciliationDiagnostics(
        unused={"gone": "G"},
        duplicate={"x": "first"},
        used_multiple={"y", "b"},
    )
    result = emit(stub("val x : int", diagnostics=diagnostics))

    assert [(w.kind, w.message) for w in result.warnings] == [
        (WarningKind.UNUSED_DOC, "unused: gone"),
        (WarningKind.DUPLICATE_DOC, "duplicate: x"),
        (WarningKind.MULTIPLY_USED_DOC, "used multiple times: b, y"),
    ]
    assert all(w.page == "s" for w in result.warnings)
    assert result.diagnostics == diagnostics


def test_end_followed_by_where_type_closes_a_level():
    result = emit(stub("structure A : sig", "type t", "end where type t = int", "val y : int"))

    assert result.text.split("\n")[1:6] == [
        "  structure A : sig",
        "    type t",
        "  end",
        "    where type t = int",
        "  val y : int",
    ]
    assert result.warnings == []

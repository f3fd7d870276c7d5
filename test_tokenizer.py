"""Tests for whitespace normalization, declaration splitting and name extraction."""

import pytest

from sml_stubgen.exceptions import NameExtractionError
from sml_stubgen.tokenizer import canonical_name, normalize_text, tokenize_declarations


def test_normalize_collapses_all_whitespace():
    assert normalize_text("  val x\n\t:  int  ") == "val x : int"
    assert normalize_text("\n  ") == ""


def test_where_type_stays_attached():
    assert tokenize_declarations("val f : t where type t = int val g : u") == [
        "val f : t where type t = int",
        "val g : u",
    ]


def test_and_type_and_sharing_type_stay_attached():
    text = "structure A : S where type t = int and type u = bool sharing type A.t = B.t type v"
    assert tokenize_declarations(text) == [
        "structure A : S where type t = int and type u = bool sharing type A.t = B.t",
        "type v",
    ]


def test_end_gets_its_own_line():
    assert tokenize_declarations("structure S = sig val x : int end") == [
        "structure S = sig",
        "val x : int",
        "end",
    ]


def test_end_keeps_trailing_where_type():
    assert tokenize_declarations("structure A : sig type t end where type t = int") == [
        "structure A : sig",
        "type t",
        "end where type t = int",
    ]


def test_every_keyword_starts_a_declaration():
    declarations = [
        "type 'a t",
        "eqtype elem",
        "datatype order = LESS | EQUAL | GREATER",
        "exception Empty",
        "val null : 'a list -> bool",
        "structure Key : ORD_KEY",
        "signature S",
        "functor F (A : S) : T",
        "include MONO_ARRAY",
    ]
    assert tokenize_declarations(normalize_text("\n  ".join(declarations))) == declarations


def test_leading_text_before_first_keyword_is_kept():
    assert tokenize_declarations("x y val z : int") == ["x y", "val z : int"]


def test_empty_input_gives_one_empty_line():
    assert tokenize_declarations("") == [""]


@pytest.mark.parametrize("text,name", [
    ("val map : ('a -> 'b) -> 'a list -> 'b list", "map"),
    ("type 'a t", "t"),
    ("datatype 'a option = NONE | SOME of 'a", "option"),
    ("eqtype ''a set", "set"),
    ("structure Key : ORD_KEY", "Key"),
    ("f (x, y)", "f"),
])
def test_canonical_name(text, name):
    assert canonical_name(text) == name


def test_canonical_name_respects_keyword_set():
    assert canonical_name("val x", keywords=[]) == "val"


def test_canonical_name_fails_without_identifier():
    with pytest.raises(NameExtractionError) as exc_info:
        canonical_name("type 'a")

    assert exc_info.value.offending_text == "type 'a"

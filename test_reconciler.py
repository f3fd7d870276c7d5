"""Tests for merging declarations with documentation entries."""

import pytest

from sml_stubgen.exceptions import NameExtractionError
from sml_stubgen.reconciler import Reconciler, reconcile
from sml_stubgen.schemas import AnnotatedDeclaration, DocEntry


def test_multi_name_entry_cross_references_first_name():
    doc_map, duplicate = Reconciler().build_doc_map([
        DocEntry(names=["val a : int", "b", "c"], prose="P"),
    ])

    assert doc_map == {"a": "P", "b": "See a.", "c": "See a."}
    assert duplicate == {}


def test_single_usage_term_is_folded_into_prose():
    doc_map, _ = Reconciler().build_doc_map([
        DocEntry(names=["f (x, y)"], prose="applies f."),
        DocEntry(names=["g x"], prose=None),
    ])

    assert doc_map == {"f": "f (x, y) applies f.", "g": "g x"}


def test_single_keyword_term_keeps_prose_verbatim():
    doc_map, _ = Reconciler().build_doc_map([
        DocEntry(names=["val x : int"], prose="the value x"),
        DocEntry(names=["exception Empty"], prose=None),
    ])

    assert doc_map == {"x": "the value x", "Empty": None}


def test_annotations_follow_declaration_order():
    declarations = ["val z : int", "type t", "val a : t", "exception E"]
    entries = [
        DocEntry(names=["val a : t"], prose="A"),
        DocEntry(names=["type t"], prose="T"),
    ]

    result = reconcile(declarations, entries)

    assert result.declarations == [
        AnnotatedDeclaration(declaration="val z : int", prose=None),
        AnnotatedDeclaration(declaration="type t", prose="T"),
        AnnotatedDeclaration(declaration="val a : t", prose="A"),
        AnnotatedDeclaration(declaration="exception E", prose=None),
    ]
    assert result.diagnostics.is_empty()


def test_unused_documentation():
    result = reconcile(["val x : int"], [
        DocEntry(names=["val x : int"], prose="X"),
        DocEntry(names=["val gone : int", "also"], prose="G"),
    ])

    assert result.diagnostics.unused == {"gone": "G", "also": "See gone."}


def test_duplicate_records_shadowed_prose():
    result = reconcile(["val x : int"], [
        DocEntry(names=["val x : int"], prose="first"),
        DocEntry(names=["val x : int"], prose="second"),
    ])

    assert result.declarations[0].prose == "second"
    assert result.diagnostics.duplicate == {"x": "first"}


def test_name_declared_twice_is_used_multiple():
    result = reconcile(["val x : int", "val x : bool", "val y : int"], [])

    assert result.diagnostics.used_multiple == {"x"}
    assert [d.prose for d in result.declarations] == [None, None, None]


def test_declaration_without_name_fails():
    with pytest.raises(NameExtractionError):
        reconcile(["type 'a"], [])


def test_reconcile_is_pure():
    entries = [DocEntry(names=["val x : int"], prose="X")]
    reconciler = Reconciler()

    first = reconciler.reconcile(["val x : int"], entries)
    second = reconciler.reconcile(["val y : int"], entries)

    assert first.declarations[0].prose == "X"
    assert second.declarations[0].prose is None
    assert second.diagnostics.unused == {"x": "X"}

import pytest

from catalogue.filters import CategorySelection, filter_records, list_categories
from catalogue.models import CanonicalRecord


@pytest.fixture
def catalogue():
    return [
        CanonicalRecord(title="Bridge repair", summary="Fix old crossings", category="Infrastructure"),
        CanonicalRecord(title="School meals", summary="Nutrition for estates", category="Social Protection"),
        CanonicalRecord(title="Port upgrade", summary="New BRIDGE cranes", category="Trade"),
        CanonicalRecord(title="Road maintenance", summary="Bridge and road upkeep", category="Infrastructure"),
    ]


def test_no_constraints_is_identity(catalogue):
    assert filter_records(catalogue, "", set()) == catalogue


def test_text_and_category(catalogue):
    out = filter_records(catalogue, "bridge", {"Infrastructure"})
    assert [r.title for r in out] == ["Bridge repair", "Road maintenance"]


def test_text_only_is_case_insensitive_and_trimmed(catalogue):
    out = filter_records(catalogue, "  BRIDGE ", set())
    assert [r.title for r in out] == ["Bridge repair", "Port upgrade", "Road maintenance"]


def test_query_spans_title_and_summary_with_single_space(catalogue):
    assert [r.title for r in filter_records(catalogue, "repair fix", set())] == ["Bridge repair"]


def test_category_match_is_exact(catalogue):
    assert filter_records(catalogue, "", {"infrastructure"}) == []
    assert len(filter_records(catalogue, "", {"Trade", "Social Protection"})) == 2


def test_filter_does_not_mutate(catalogue):
    before = list(catalogue)
    out = filter_records(catalogue, "school", set())
    out.clear()
    assert catalogue == before


def test_list_categories_dedupes_case_sensitively():
    records = [
        CanonicalRecord(title="a", category="Trade"),
        CanonicalRecord(title="b", category="trade"),
        CanonicalRecord(title="c", category="Infra"),
        CanonicalRecord(title="d", category="Infra"),
        CanonicalRecord(title="e", category=""),
    ]
    cats = list_categories(records)
    assert len(cats) == 3
    assert cats == ["Infra", "trade", "Trade"]


def test_list_categories_ignores_accents_for_order():
    records = [CanonicalRecord(title=t, category=t) for t in ("Zeta", "Éducation", "Energy")]
    assert list_categories(records) == ["Éducation", "Energy", "Zeta"]


def test_selection_starts_as_all():
    sel = CategorySelection()
    assert sel.is_all
    assert sel.selected() == frozenset()
    assert sel.summary() == "All categories"


def test_selection_toggle_and_fallback_to_all():
    sel = CategorySelection()
    sel.toggle("Trade")
    sel.toggle("Infrastructure")
    assert sel.selected() == {"Trade", "Infrastructure"}
    sel.toggle("Trade")
    assert sel.selected() == {"Infrastructure"}
    sel.toggle("Infrastructure")
    assert sel.is_all


def test_selection_choose_all_clears():
    sel = CategorySelection.from_labels(["Trade", "All categories"])
    assert sel.is_all
    sel = CategorySelection.from_labels(["All categories", "Trade", "Trade"])
    assert sel.selected() == {"Trade"}

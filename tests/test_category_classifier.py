"""
Tests for the keyword category classifier.
"""

from types import SimpleNamespace

import pytest

from services.category_classifier import find_best_match


def category(name, sort_order):
    return SimpleNamespace(name=name, sort_order=sort_order)


@pytest.fixture
def defaults():
    return [
        category("Frozen", 60),
        category("Produce", 10),
        category("Bakery", 40),
        category("Dairy & Milk", 20),
    ]


def test_matches_on_shared_keyword(defaults):
    assert find_best_match("Milk", defaults).name == "Dairy & Milk"
    assert find_best_match("frozen peas", defaults).name == "Frozen"


def test_substring_works_in_both_directions(defaults):
    # "bake" is inside "bakery", "produce" is inside "produce-aisle"
    assert find_best_match("bake mix", defaults).name == "Bakery"
    assert find_best_match("produce-aisle herbs", defaults).name == "Produce"


def test_no_keyword_match_returns_none():
    categories = [category("Dairy", 20), category("Produce", 10)]

    assert find_best_match("whole milk", categories) is None
    assert find_best_match("", categories) is None
    assert find_best_match("   ", categories) is None
    assert find_best_match("milk", []) is None


def test_lowest_sort_order_wins(defaults):
    both = [category("Frozen Bakery", 60), category("Bakery", 40)]

    assert find_best_match("bakery", both).name == "Bakery"


def test_equal_sort_order_keeps_input_order():
    first = category("Snacks", 10)
    second = category("Snack Bars", 10)

    assert find_best_match("snack", [first, second]) is first
    assert find_best_match("snack", [second, first]) is second


def test_result_is_deterministic(defaults):
    results = {find_best_match("frozen milk", defaults).name for _ in range(20)}

    # Dairy & Milk sorts before Frozen
    assert results == {"Dairy & Milk"}


def test_short_tokens_match_loosely(defaults):
    # A lone "&" matches the "&" in "Dairy & Milk"
    assert find_best_match("salt & pepper", defaults).name == "Dairy & Milk"

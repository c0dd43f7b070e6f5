"""
Keyword heuristic that picks a default category for a free-text item name.
"""

from typing import Any, Iterable, Optional


def _tokens(text: str) -> list:
    return text.lower().split()


def find_best_match(item_name: str, categories: Iterable[Any]) -> Optional[Any]:
    """Return the first category, by ``sort_order``, sharing a token with ``item_name``.

    Two tokens match when either one is a substring of the other. The sort
    is stable, so categories with equal ``sort_order`` keep their input
    order. Returns None when nothing matches.
    """
    keywords = _tokens(item_name)
    if not keywords:
        return None

    for category in sorted(categories, key=lambda c: c.sort_order):
        for keyword in keywords:
            for word in _tokens(category.name):
                if keyword in word or word in keyword:
                    return category
    return None

"""
Default category taxonomy and its idempotent seeding.
"""

import logging
from typing import List

from domain.schemas import CategoryCreate

logger = logging.getLogger("listly.seed")

DEFAULT_CATEGORIES = [
    {"name": "Produce", "slug": "produce", "icon": "🥦", "color": "#22c55e", "sort_order": 10},
    {"name": "Dairy & Cheese", "slug": "dairy", "icon": "🧀", "color": "#eab308", "sort_order": 20},
    {"name": "Meat & Seafood", "slug": "meat", "icon": "🥩", "color": "#ef4444", "sort_order": 30},
    {"name": "Bakery", "slug": "bakery", "icon": "🥖", "color": "#f97316", "sort_order": 40},
    {"name": "Pantry", "slug": "pantry", "icon": "🥫", "color": "#8b5cf6", "sort_order": 50},
    {"name": "Frozen", "slug": "frozen", "icon": "❄️", "color": "#06b6d4", "sort_order": 60},
    {"name": "Beverages", "slug": "beverages", "icon": "🥤", "color": "#3b82f6", "sort_order": 70},
    {"name": "Snacks", "slug": "snacks", "icon": "🍿", "color": "#ec4899", "sort_order": 80},
    {"name": "Household", "slug": "household", "icon": "🧹", "color": "#64748b", "sort_order": 90},
    {"name": "Personal Care", "slug": "personal-care", "icon": "🧴", "color": "#d946ef", "sort_order": 100},
    {"name": "Pets", "slug": "pets", "icon": "🐾", "color": "#a855f7", "sort_order": 110},
    {"name": "Other", "slug": "other", "icon": "📦", "color": "#94a3b8", "sort_order": 999},
]


def seed_default_categories(category_repo) -> List[str]:
    """Create every default category whose slug is not taken yet.

    Safe to run repeatedly. Returns the slugs that were created.
    """
    created = []
    for entry in DEFAULT_CATEGORIES:
        if category_repo.find_by_slug(entry["slug"]) is not None:
            logger.debug("Category exists: %s", entry["name"])
            continue
        category_repo.create(CategoryCreate(**entry, is_default=True))
        created.append(entry["slug"])
        logger.info("Created category: %s", entry["name"])
    return created

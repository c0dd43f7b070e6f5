"""
Domain enums for the Listly data-access core.
Contains all enumeration types used across the domain models.
"""

import enum


class AuthProvider(str, enum.Enum):
    """Identity providers a user can sign in with"""

    EMAIL = "EMAIL"
    GOOGLE = "GOOGLE"
    GITHUB = "GITHUB"


class ListStatus(str, enum.Enum):
    """Shopping list lifecycle"""

    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class CollaboratorRole(str, enum.Enum):
    """Role a collaborator holds on a shared list"""

    OWNER = "OWNER"
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"


class MealType(str, enum.Enum):
    """Meal slots within a day"""

    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"
    SNACK = "SNACK"


class Theme(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"

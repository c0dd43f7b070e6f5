from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID
from decimal import Decimal

from domain.enums import CollaboratorRole, ListStatus

MAX_LIST_NAME_LENGTH = 100


class ShoppingListCreate(BaseModel):
    """Schema for creating a shopping list"""

    name: str = Field(..., min_length=1, max_length=MAX_LIST_NAME_LENGTH)
    owner_id: UUID
    description: Optional[str] = None
    status: ListStatus = ListStatus.ACTIVE
    store_id: Optional[UUID] = None
    budget: Optional[Decimal] = Field(None, ge=0)
    color: Optional[str] = None
    icon: Optional[str] = None
    is_template: bool = False


class ShoppingListUpdate(BaseModel):
    """Partial list update. Setting ``owner_id`` reassigns ownership."""

    name: Optional[str] = Field(None, min_length=1, max_length=MAX_LIST_NAME_LENGTH)
    description: Optional[str] = None
    status: Optional[ListStatus] = None
    owner_id: Optional[UUID] = None
    store_id: Optional[UUID] = None
    budget: Optional[Decimal] = Field(None, ge=0)
    color: Optional[str] = None
    icon: Optional[str] = None
    is_template: Optional[bool] = None


class ListItemCreate(BaseModel):
    """Schema for adding an item to a list"""

    list_id: UUID
    name: str = Field(..., min_length=1, max_length=200)
    quantity: Decimal = Field(default=Decimal("1"), gt=0)
    unit: Optional[str] = None
    notes: Optional[str] = None
    priority: int = 0
    is_checked: bool = False
    estimated_price: Optional[Decimal] = Field(None, ge=0)
    category_id: Optional[UUID] = None
    sort_order: int = 0
    added_by_id: Optional[UUID] = None


class ListItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    quantity: Optional[Decimal] = Field(None, gt=0)
    unit: Optional[str] = None
    notes: Optional[str] = None
    priority: Optional[int] = None
    is_checked: Optional[bool] = None
    estimated_price: Optional[Decimal] = Field(None, ge=0)
    category_id: Optional[UUID] = None
    sort_order: Optional[int] = None


class ItemPosition(BaseModel):
    id: UUID
    sort_order: int


class CollaboratorCreate(BaseModel):
    list_id: UUID
    user_id: UUID
    role: CollaboratorRole = CollaboratorRole.VIEWER


class CollaboratorUserSummary(BaseModel):
    id: UUID
    name: Optional[str] = None
    email: str
    avatar_url: Optional[str] = None

    model_config = {"from_attributes": True}


class CollaboratorWithUser(BaseModel):
    id: UUID
    list_id: UUID
    user_id: UUID
    role: CollaboratorRole
    joined_at: datetime
    user: CollaboratorUserSummary

    model_config = {"from_attributes": True}


class ListOwnerSummary(BaseModel):
    id: UUID
    name: Optional[str] = None

    model_config = {"from_attributes": True}


class CollaborationListSummary(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    status: ListStatus
    owner: ListOwnerSummary

    model_config = {"from_attributes": True}


class CollaborationWithList(BaseModel):
    id: UUID
    list_id: UUID
    user_id: UUID
    role: CollaboratorRole
    joined_at: datetime
    list: CollaborationListSummary

    model_config = {"from_attributes": True}


class ListItemSummary(BaseModel):
    id: UUID
    name: str
    quantity: Decimal
    unit: Optional[str] = None
    is_checked: bool
    category_id: Optional[UUID] = None
    estimated_price: Optional[Decimal] = None
    sort_order: int

    model_config = {"from_attributes": True}


class ListStoreSummary(BaseModel):
    id: UUID
    name: str
    chain: Optional[str] = None

    model_config = {"from_attributes": True}


class ListWithDetails(BaseModel):
    """A list with its items, collaborators and target store"""

    id: UUID
    name: str
    description: Optional[str] = None
    status: ListStatus
    owner_id: UUID
    store_id: Optional[UUID] = None
    budget: Optional[Decimal] = None
    created_at: datetime
    updated_at: datetime
    items: List[ListItemSummary] = []
    collaborators: List[CollaboratorWithUser] = []
    store: Optional[ListStoreSummary] = None

    model_config = {"from_attributes": True}


class ListNameSummary(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}


class ItemCategorySummary(BaseModel):
    id: UUID
    name: str
    slug: str

    model_config = {"from_attributes": True}


class ItemWithDetails(BaseModel):
    """A list item with its category, author and parent list"""

    id: UUID
    list_id: UUID
    name: str
    quantity: Decimal
    unit: Optional[str] = None
    notes: Optional[str] = None
    is_checked: bool
    estimated_price: Optional[Decimal] = None
    sort_order: int
    created_at: datetime
    category: Optional[ItemCategorySummary] = None
    added_by: Optional[CollaboratorUserSummary] = None
    list: ListNameSummary

    model_config = {"from_attributes": True}

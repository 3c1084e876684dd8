from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime
from storefront.db.models import ProductCategory, OrderStatus

class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class StrictIn(CamelModel):
    class Config:
        extra = 'forbid'

# --- users ---
class UserPreferenceIn(StrictIn):
    receive_email: bool
class UserPreferencePatch(StrictIn):
    receive_email: Optional[bool] = None
class UserPreferenceRead(CamelModel):
    id: str
    receive_email: bool
    created_at: datetime
    updated_at: datetime
class UserPreferenceSummary(CamelModel):
    receive_email: bool

class UserCreate(StrictIn):
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)
    address: str
    user_preference: UserPreferenceIn
class UserUpdate(StrictIn):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=30)
    address: Optional[str] = None
    user_preference: Optional[UserPreferencePatch] = None
class UserBase(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str
    address: str
    created_at: datetime
    updated_at: datetime
class UserListItem(UserBase):
    user_preference: Optional[UserPreferenceSummary] = None
class UserRead(UserBase):
    user_preference: Optional[UserPreferenceRead] = None

class SavedProductIn(StrictIn):
    product_id: str

# --- products ---
class ProductCreate(StrictIn):
    name: str = Field(min_length=1, max_length=60)
    description: str = ''
    category: ProductCategory
    price: float = Field(ge=0)
    stock: int = Field(ge=0)
class ProductUpdate(StrictIn):
    name: Optional[str] = Field(default=None, min_length=1, max_length=60)
    description: Optional[str] = None
    category: Optional[ProductCategory] = None
    price: Optional[float] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)
class ProductRead(CamelModel):
    id: str
    name: str
    description: str
    category: ProductCategory
    price: float
    stock: int
    created_at: datetime
    updated_at: datetime

# --- orders ---
class OrderItemIn(StrictIn):
    product_id: str
    quantity: int = Field(ge=1)
    unit_price: float = Field(ge=0)
class OrderCreate(StrictIn):
    user_id: str
    order_items: List[OrderItemIn] = Field(min_length=1)
class OrderUpdate(StrictIn):
    status: OrderStatus
class OrderItemRead(CamelModel):
    id: str
    order_id: str
    product_id: str
    quantity: int
    unit_price: float
class OrderRead(CamelModel):
    id: str
    user_id: str
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
class OrderWithItems(OrderRead):
    order_items: List[OrderItemRead] = []
class OrderDetail(OrderWithItems):
    total: float

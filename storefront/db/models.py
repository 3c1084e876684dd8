from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Text, Boolean, Float, DateTime, ForeignKey, Table, Column, CheckConstraint, Enum as SAEnum
from datetime import datetime, timezone
from typing import List
import enum, uuid
from storefront.db.session import Base

def new_id() -> str: return str(uuid.uuid4())

def now_utc() -> datetime: return datetime.now(timezone.utc)

class ProductCategory(str, enum.Enum):
    FASHION = 'FASHION'
    BEAUTY = 'BEAUTY'
    SPORTS = 'SPORTS'
    ELECTRONICS = 'ELECTRONICS'
    HOME_INTERIOR = 'HOME_INTERIOR'
    HOUSEHOLD_SUPPLIES = 'HOUSEHOLD_SUPPLIES'
    KITCHENWARE = 'KITCHENWARE'

class OrderStatus(str, enum.Enum):
    PENDING = 'PENDING'
    COMPLETE = 'COMPLETE'

saved_products_table = Table(
    'saved_products', Base.metadata,
    Column('user_id', String(36), ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
    Column('product_id', String(36), ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
)

class User(Base):
    __tablename__='users'
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(30), nullable=False)
    last_name: Mapped[str] = mapped_column(String(30), nullable=False)
    address: Mapped[str] = mapped_column(Text, default='')
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
    user_preference = relationship('UserPreference', back_populates='user', uselist=False, cascade='all, delete-orphan')
    orders = relationship('Order', back_populates='user', cascade='all, delete-orphan')
    saved_products: Mapped[List['Product']] = relationship('Product', secondary=saved_products_table, back_populates='saved_by')

class UserPreference(Base):
    __tablename__='user_preferences'
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    receive_email: Mapped[bool] = mapped_column(Boolean, default=False)
    user_id: Mapped[str] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
    user = relationship('User', back_populates='user_preference')

class Product(Base):
    __tablename__='products'
    __table_args__ = (CheckConstraint('stock >= 0', name='ck_products_stock_non_negative'),)
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    description: Mapped[str] = mapped_column(Text, default='')
    category: Mapped[ProductCategory] = mapped_column(SAEnum(ProductCategory, name='product_category'), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
    saved_by = relationship('User', secondary=saved_products_table, back_populates='saved_products')

class Order(Base):
    __tablename__ = 'orders'
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), index=True, nullable=False)
    status: Mapped[OrderStatus] = mapped_column(SAEnum(OrderStatus, name='order_status'), default=OrderStatus.PENDING)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    user = relationship('User', back_populates='orders')
    order_items = relationship('OrderItem', back_populates='order', cascade='all, delete-orphan')

    @property
    def total(self) -> float:
        # computed on read, never persisted
        return sum(it.quantity * it.unit_price for it in self.order_items)

class OrderItem(Base):
    __tablename__ = 'order_items'
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    order_id: Mapped[str] = mapped_column(ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    product_id: Mapped[str] = mapped_column(ForeignKey('products.id'), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[float] = mapped_column(Float, nullable=False)

    order = relationship('Order', back_populates='order_items')

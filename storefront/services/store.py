from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import select, update as sa_update
from sqlalchemy.orm import Session, selectinload

from storefront.core.errors import NotFound
from storefront.db.models import Base, Order, OrderItem, Product, User, UserPreference

M = TypeVar("M", bound=Base)

USER_ORDERING = {
    "oldest": User.created_at.asc(),
    "newest": User.created_at.desc(),
}

PRODUCT_ORDERING = {
    "priceLowest": Product.price.asc(),
    "priceHighest": Product.price.desc(),
    "oldest": Product.created_at.asc(),
    "newest": Product.created_at.desc(),
}


def get_or_404(db: Session, model: Type[M], obj_id: str) -> M:
    obj = db.get(model, obj_id)
    if obj is None:
        raise NotFound(f"{model.__name__} not found")
    return obj


def apply_fields(obj: Base, fields: Dict[str, Any]) -> None:
    for k, v in fields.items():
        setattr(obj, k, v)


def delete(db: Session, model: Type[Base], obj_id: str) -> None:
    obj = get_or_404(db, model, obj_id)
    db.delete(obj)
    db.commit()


# --- users ---

def list_users(db: Session, offset: int, limit: int, order: str) -> List[User]:
    stmt = (
        select(User)
        .options(selectinload(User.user_preference))
        .order_by(USER_ORDERING.get(order, USER_ORDERING["newest"]))
        .offset(offset)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def create_user(db: Session, fields: Dict[str, Any], preference: Dict[str, Any]) -> User:
    user = User(**fields, user_preference=UserPreference(**preference))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user_id: str, fields: Dict[str, Any],
                preference: Optional[Dict[str, Any]]) -> User:
    user = get_or_404(db, User, user_id)
    apply_fields(user, fields)
    if preference:
        if user.user_preference is None:
            user.user_preference = UserPreference(**preference)
        else:
            apply_fields(user.user_preference, preference)
    db.commit()
    db.refresh(user)
    return user


def save_product(db: Session, user_id: str, product_id: str) -> List[Product]:
    user = get_or_404(db, User, user_id)
    product = get_or_404(db, Product, product_id)
    if product not in user.saved_products:
        user.saved_products.append(product)
    db.commit()
    db.refresh(user)
    return user.saved_products


# --- products ---

def list_products(db: Session, offset: int, limit: int, order: str,
                  category: Optional[str] = None) -> List[Product]:
    stmt = select(Product)
    if category is not None:
        stmt = stmt.where(Product.category == category)
    stmt = (
        stmt.order_by(PRODUCT_ORDERING.get(order, PRODUCT_ORDERING["newest"]))
        .offset(offset)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def create(db: Session, obj: M) -> M:
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def update(db: Session, model: Type[M], obj_id: str, fields: Dict[str, Any]) -> M:
    obj = get_or_404(db, model, obj_id)
    apply_fields(obj, fields)
    db.commit()
    db.refresh(obj)
    return obj


def products_by_ids(db: Session, product_ids: Iterable[str], lock: bool = False) -> List[Product]:
    """One read for the whole set; ``lock`` takes row locks in id order."""
    stmt = select(Product).where(Product.id.in_(list(product_ids))).order_by(Product.id)
    if lock:
        stmt = stmt.with_for_update()
    return list(db.execute(stmt).scalars().all())


def decrement_stock(db: Session, product_id: str, quantity: int) -> bool:
    """Guarded decrement; returns False when stock would go negative."""
    res = db.execute(
        sa_update(Product)
        .where(Product.id == product_id, Product.stock >= quantity)
        .values(stock=Product.stock - quantity)
        .execution_options(synchronize_session=False)
    )
    return res.rowcount == 1


# --- orders ---

def list_orders(db: Session) -> List[Order]:
    return list(db.execute(select(Order).order_by(Order.created_at.desc())).scalars().all())


def get_order_with_items(db: Session, order_id: str) -> Order:
    stmt = select(Order).options(selectinload(Order.order_items)).where(Order.id == order_id)
    order = db.execute(stmt).scalar_one_or_none()
    if order is None:
        raise NotFound("Order not found")
    return order


def new_order(user_id: str, items: Iterable[Dict[str, Any]]) -> Order:
    return Order(user_id=user_id, order_items=[OrderItem(**it) for it in items])

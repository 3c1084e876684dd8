# Business-rule failures are returned, store errors propagate after rollback.
from dataclasses import dataclass
from typing import Dict, Iterable, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.core.errors import ErrorKind
from storefront.core.logging import get_logger
from storefront.db.models import Order, User
from storefront.schemas import OrderItemIn
from storefront.services import store

log = get_logger("placement")

INSUFFICIENT_STOCK_MSG = "Insufficient stock"


@dataclass(frozen=True)
class Placed:
    order: Order


@dataclass(frozen=True)
class PlacementFailure:
    kind: ErrorKind
    message: str


PlacementResult = Union[Placed, PlacementFailure]


def requested_quantities(items: Iterable[OrderItemIn]) -> Dict[str, int]:
    """Total quantity per product id, in first-seen order."""
    wanted: Dict[str, int] = {}
    for it in items:
        wanted[it.product_id] = wanted.get(it.product_id, 0) + it.quantity
    return wanted


def place_order(db: Session, user_id: str, items: Iterable[OrderItemIn]) -> PlacementResult:
    items = list(items)
    wanted = requested_quantities(items)

    try:
        if db.get(User, user_id) is None:
            db.rollback()
            return PlacementFailure(ErrorKind.NOT_FOUND, "User not found")

        # single read; rows stay locked until commit/rollback where supported
        products = store.products_by_ids(db, wanted.keys(), lock=True)
        if len(products) != len(wanted):
            missing = set(wanted) - {p.id for p in products}
            db.rollback()
            log.warning("Order for user %s references unknown products %s", user_id, sorted(missing))
            return PlacementFailure(ErrorKind.NOT_FOUND, "Product not found")

        if not all(p.stock >= wanted[p.id] for p in products):
            db.rollback()
            log.warning("Order for user %s rejected: insufficient stock", user_id)
            return PlacementFailure(ErrorKind.INSUFFICIENT_STOCK, INSUFFICIENT_STOCK_MSG)

        order = store.new_order(user_id, (it.model_dump() for it in items))
        db.add(order)
        db.flush()
        for product_id in sorted(wanted):
            if not store.decrement_stock(db, product_id, wanted[product_id]):
                # a concurrent placement drew the stock down after our check
                db.rollback()
                log.warning("Order for user %s lost a stock race on %s", user_id, product_id)
                return PlacementFailure(ErrorKind.INSUFFICIENT_STOCK, INSUFFICIENT_STOCK_MSG)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    for p in products:
        db.expire(p, ["stock"])
    log.info("Placed order %s for user %s (%d items)", order.id, user_id, len(items))
    return Placed(order)

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List
from storefront.api.deps import get_db
from storefront.core.errors import error_response
from storefront.db.models import Order
from storefront.schemas import OrderCreate, OrderUpdate, OrderRead, OrderWithItems, OrderDetail
from storefront.services import store
from storefront.services.placement import place_order, PlacementFailure

router = APIRouter()

@router.get('', response_model=List[OrderRead])
def list_orders(db: Session = Depends(get_db)):
    return store.list_orders(db)

@router.get('/{order_id}', response_model=OrderDetail)
def get_order(order_id: str, db: Session = Depends(get_db)):
    # total is a computed property on the model
    return store.get_order_with_items(db, order_id)

@router.post('', response_model=OrderWithItems, status_code=201)
def create_order(payload: OrderCreate, db: Session = Depends(get_db)):
    result = place_order(db, payload.user_id, payload.order_items)
    if isinstance(result, PlacementFailure):
        return error_response(result.kind, result.message)
    return result.order

@router.patch('/{order_id}', response_model=OrderRead)
def update_order(order_id: str, payload: OrderUpdate, db: Session = Depends(get_db)):
    return store.update(db, Order, order_id, payload.model_dump(exclude_unset=True))

@router.delete('/{order_id}', status_code=204)
def delete_order(order_id: str, db: Session = Depends(get_db)):
    store.delete(db, Order, order_id)
    return Response(status_code=204)

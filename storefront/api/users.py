from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import List
from storefront.api.deps import get_db
from storefront.db.models import User
from storefront.schemas import UserCreate, UserUpdate, UserRead, UserListItem, SavedProductIn, ProductRead, OrderRead
from storefront.services import store

router = APIRouter()

@router.get('', response_model=List[UserListItem])
def list_users(db: Session = Depends(get_db), offset: int = Query(0, ge=0), limit: int = Query(10, ge=0), order: str = 'newest'):
    return store.list_users(db, offset=offset, limit=limit, order=order)

@router.get('/{user_id}', response_model=UserRead)
def get_user(user_id: str, db: Session = Depends(get_db)):
    return store.get_or_404(db, User, user_id)

@router.post('', response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    fields = payload.model_dump(exclude={'user_preference'})
    return store.create_user(db, fields, payload.user_preference.model_dump())

@router.patch('/{user_id}', response_model=UserRead)
def update_user(user_id: str, payload: UserUpdate, db: Session = Depends(get_db)):
    fields = payload.model_dump(exclude_unset=True, exclude_none=True, exclude={'user_preference'})
    preference = payload.user_preference.model_dump(exclude_unset=True, exclude_none=True) if payload.user_preference else None
    return store.update_user(db, user_id, fields, preference)

@router.delete('/{user_id}', status_code=204)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    store.delete(db, User, user_id)
    return Response(status_code=204)

@router.get('/{user_id}/saved-products', response_model=List[ProductRead])
def list_saved_products(user_id: str, db: Session = Depends(get_db)):
    return store.get_or_404(db, User, user_id).saved_products

@router.post('/{user_id}/saved-products', response_model=List[ProductRead])
def save_product(user_id: str, payload: SavedProductIn, db: Session = Depends(get_db)):
    return store.save_product(db, user_id, payload.product_id)

@router.get('/{user_id}/orders', response_model=List[OrderRead])
def list_user_orders(user_id: str, db: Session = Depends(get_db)):
    return store.get_or_404(db, User, user_id).orders

from fastapi import APIRouter, Depends, Query, Response
from typing import List, Optional
from sqlalchemy.orm import Session
from storefront.api.deps import get_db
from storefront.db import models
from storefront.schemas import ProductCreate, ProductUpdate, ProductRead
from storefront.services import store

router = APIRouter()

@router.get('', response_model=List[ProductRead])
def list_products(db: Session = Depends(get_db), offset: int = Query(0, ge=0), limit: int = Query(10, ge=0), order: str = 'newest', category: Optional[models.ProductCategory] = None):
    return store.list_products(db, offset=offset, limit=limit, order=order, category=category)

@router.get('/{product_id}', response_model=ProductRead)
def get_product(product_id: str, db: Session = Depends(get_db)):
    return store.get_or_404(db, models.Product, product_id)

@router.post('', response_model=ProductRead, status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    return store.create(db, models.Product(**payload.model_dump()))

@router.patch('/{product_id}', response_model=ProductRead)
def update_product(product_id: str, payload: ProductUpdate, db: Session = Depends(get_db)):
    return store.update(db, models.Product, product_id, payload.model_dump(exclude_unset=True, exclude_none=True))

@router.delete('/{product_id}', status_code=204)
def delete_product(product_id: str, db: Session = Depends(get_db)):
    store.delete(db, models.Product, product_id)
    return Response(status_code=204)

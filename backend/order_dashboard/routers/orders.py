"""Order API."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from .. import schemas
from ..exceptions import OrderNotFound, ValidationMissing
from ..services.reporting import summarize_orders
from ..storage import OrderStore, get_store

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("")
def read_orders(
    order_number: Optional[str] = Query(None, alias="orderNumber"),
    store: OrderStore = Depends(get_store),
):
    if order_number:
        try:
            return store.get(order_number)
        except OrderNotFound as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found") from exc
    return store.list_orders()


@router.get("/summary", response_model=schemas.OrdersSummary)
def orders_summary(store: OrderStore = Depends(get_store)):
    return summarize_orders(store.list_orders())


@router.get("/{order_number}", response_model=schemas.Order)
def read_order(order_number: str, store: OrderStore = Depends(get_store)):
    try:
        return store.get(order_number)
    except OrderNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found") from exc


@router.post("", response_model=schemas.Order, status_code=status.HTTP_201_CREATED)
def create_order(payload: schemas.OrderCreate, store: OrderStore = Depends(get_store)):
    try:
        return store.create(payload.model_dump(by_alias=True))
    except ValidationMissing as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc


@router.put("", response_model=schemas.Order)
def update_order_status(
    payload: Optional[schemas.StatusUpdate] = None,
    order_number: Optional[str] = Query(None, alias="orderNumber"),
    store: OrderStore = Depends(get_store),
):
    """Status-only update; any other body fields are ignored."""
    try:
        return store.update_status(order_number, payload.status if payload else None)
    except ValidationMissing as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except OrderNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found") from exc


@router.put("/{order_number}", response_model=schemas.Order)
def replace_order(order_number: str, payload: schemas.Order, store: OrderStore = Depends(get_store)):
    try:
        return store.update_full(order_number, payload)
    except ValidationMissing as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except OrderNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found") from exc


@router.delete("", response_model=schemas.DeleteResult)
def delete_order(
    order_number: Optional[str] = Query(None, alias="orderNumber"),
    store: OrderStore = Depends(get_store),
):
    try:
        removed = store.delete(order_number)
    except ValidationMissing as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    return schemas.DeleteResult(message="Order deleted successfully", deleted=removed)

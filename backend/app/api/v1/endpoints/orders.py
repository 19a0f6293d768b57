# backend/app/api/v1/endpoints/orders.py
"""
Endpoints de pedidos: listado con filtros, alta, detalle y cambio de estado.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.api.flash import read_flash, redirect_with_flash
from app.core.exceptions import (
    InvalidIdError,
    InvalidStatusError,
    InvalidTransitionError,
    NotFoundError,
)
from app.crud import order_crud
from app.schemas import order_schema
from app.schemas.flash_schema import FlashMessage
from app.services.order_lifecycle import next_statuses, order_lifecycle_service
from app.services.order_service import order_service

router = APIRouter()


@router.get("", response_model=order_schema.OrderListPage, name="list_orders")
async def list_orders(
    request: Request,
    search: str = "",
    sort: str = order_crud.DEFAULT_SORT,
    status_filter: Optional[str] = Query(None, alias="status"),
    db: AsyncSession = Depends(deps.get_db),
) -> order_schema.OrderListPage:
    """
    Lista de pedidos, por defecto los más recientes primero.

    Acepta ``status`` como filtro. Si el valor no es un estado conocido se
    ignora y se informa con un aviso de error.
    """
    flash = read_flash(request)
    try:
        orders, applied_sort, applied_status = await order_service.list_orders(
            db, search=search, sort=sort, status=status_filter
        )
    except InvalidStatusError as e:
        orders, applied_sort, applied_status = await order_service.list_orders(db, search=search, sort=sort)
        flash = FlashMessage(kind="error", text=e.message)

    return order_schema.OrderListPage(
        orders=[order_schema.OrderSummary.model_validate(o) for o in orders],
        search=search,
        sort=applied_sort,
        status=applied_status,
        flash=flash,
    )


@router.get("/new", response_model=order_schema.OrderFormPage, name="new_order_form")
async def new_order_form(request: Request, db: AsyncSession = Depends(deps.get_db)) -> order_schema.OrderFormPage:
    """Opciones de cliente y restaurante para el formulario de alta."""
    clients, restaurants = await order_service.get_form_options(db)
    return order_schema.OrderFormPage(clients=clients, restaurants=restaurants, flash=read_flash(request))


@router.post("", response_class=RedirectResponse, status_code=status.HTTP_303_SEE_OTHER, name="create_order")
async def create_order(request: Request, db: AsyncSession = Depends(deps.get_db)):
    """
    Crea un pedido. Campos: clientId, restaurantId e items (array JSON de
    objetos con quantity, description y unitPrice).
    """
    form = await request.form()
    result = await order_service.create_order(db, form)
    if not result.ok:
        return redirect_with_flash(request, "new_order_form", "error", result.error.message)
    return redirect_with_flash(request, "list_orders", "success", "Order created successfully.")


@router.get("/{order_id}", response_model=order_schema.OrderDetailPage, name="order_detail")
async def order_detail(
    request: Request,
    order_id: str,
    db: AsyncSession = Depends(deps.get_db),
) -> order_schema.OrderDetailPage:
    """Detalle del pedido con cliente, restaurante, líneas, total y estados siguientes."""
    try:
        order = await order_service.get_order(db, order_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return order_schema.OrderDetailPage(
        order=order_schema.OrderDetail.model_validate(order),
        allowed_statuses=next_statuses(order.status),
        flash=read_flash(request),
    )


@router.post("/{order_id}/status", response_class=RedirectResponse, status_code=status.HTTP_303_SEE_OTHER, name="update_order_status")
async def update_order_status(request: Request, order_id: str, db: AsyncSession = Depends(deps.get_db)):
    """Avanza el estado del pedido según la tabla de transiciones."""
    form = await request.form()
    try:
        order = await order_lifecycle_service.transition(db, order_id, form.get("status"))
    except (InvalidIdError, NotFoundError) as e:
        return redirect_with_flash(request, "list_orders", "error", e.message)
    except (InvalidStatusError, InvalidTransitionError) as e:
        return redirect_with_flash(request, "order_detail", "error", e.message, order_id=order_id)

    return redirect_with_flash(
        request, "list_orders", "success", f"Order status updated to {order.status.value}."
    )

# backend/app/api/v1/endpoints/restaurants.py
"""
Endpoints de restaurantes. Misma estructura que los de clientes.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.api.flash import read_flash, redirect_with_flash
from app.core.exceptions import DomainError, InvalidIdError, NotFoundError
from app.crud import restaurant_crud
from app.schemas import restaurant_schema
from app.services.restaurant_service import restaurant_service

router = APIRouter()


@router.get("", response_model=restaurant_schema.RestaurantListPage, name="list_restaurants")
async def list_restaurants(
    request: Request,
    search: str = "",
    sort: str = restaurant_crud.DEFAULT_SORT,
    db: AsyncSession = Depends(deps.get_db),
) -> restaurant_schema.RestaurantListPage:
    """Lista de restaurantes con búsqueda (nombre, dirección) y orden."""
    restaurants, applied_sort = await restaurant_service.list_restaurants(db, search=search, sort=sort)
    return restaurant_schema.RestaurantListPage(
        restaurants=[restaurant_schema.RestaurantResponse.model_validate(r) for r in restaurants],
        search=search,
        sort=applied_sort,
        flash=read_flash(request),
    )


@router.get("/new", response_model=restaurant_schema.RestaurantFormPage, name="new_restaurant_form")
async def new_restaurant_form(request: Request) -> restaurant_schema.RestaurantFormPage:
    return restaurant_schema.RestaurantFormPage(flash=read_flash(request))


@router.post("", response_class=RedirectResponse, status_code=status.HTTP_303_SEE_OTHER, name="create_restaurant")
async def create_restaurant(request: Request, db: AsyncSession = Depends(deps.get_db)):
    """Crea un restaurante a partir del formulario (name, phone, address)."""
    form = await request.form()
    result = await restaurant_service.create_restaurant(db, form)
    if not result.ok:
        return redirect_with_flash(request, "new_restaurant_form", "error", result.error.message)
    return redirect_with_flash(request, "list_restaurants", "success", "Restaurant created successfully.")


@router.get("/edit/{restaurant_id}", response_model=restaurant_schema.RestaurantEditPage, name="edit_restaurant_form")
async def edit_restaurant_form(
    request: Request,
    restaurant_id: str,
    db: AsyncSession = Depends(deps.get_db),
) -> restaurant_schema.RestaurantEditPage:
    try:
        restaurant = await restaurant_service.get_restaurant(db, restaurant_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return restaurant_schema.RestaurantEditPage(
        restaurant=restaurant_schema.RestaurantResponse.model_validate(restaurant),
        flash=read_flash(request),
    )


@router.post("/edit/{restaurant_id}", response_class=RedirectResponse, status_code=status.HTTP_303_SEE_OTHER, name="update_restaurant")
async def update_restaurant(request: Request, restaurant_id: str, db: AsyncSession = Depends(deps.get_db)):
    form = await request.form()
    try:
        result = await restaurant_service.update_restaurant(db, restaurant_id, form)
    except (InvalidIdError, NotFoundError) as e:
        return redirect_with_flash(request, "list_restaurants", "error", e.message)

    if not result.ok:
        return redirect_with_flash(
            request, "edit_restaurant_form", "error", result.error.message, restaurant_id=restaurant_id
        )
    return redirect_with_flash(request, "list_restaurants", "success", "Restaurant updated successfully.")


@router.post("/{restaurant_id}", response_class=RedirectResponse, status_code=status.HTTP_303_SEE_OTHER, name="delete_restaurant")
async def delete_restaurant(request: Request, restaurant_id: str, db: AsyncSession = Depends(deps.get_db)):
    """Elimina un restaurante junto con sus pedidos y las líneas de esos pedidos."""
    try:
        result = await restaurant_service.delete_restaurant(db, restaurant_id)
    except DomainError as e:
        return redirect_with_flash(request, "list_restaurants", "error", e.message)

    return redirect_with_flash(
        request,
        "list_restaurants",
        "success",
        f"Restaurant and {result.orders_deleted} associated orders deleted successfully.",
    )

# backend/app/api/v1/endpoints/clients.py
"""
Endpoints de clientes: loaders de página (GET, JSON) y acciones de formulario
(POST, form-encoded) que terminan en una redirección con mensaje flash.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.api.flash import read_flash, redirect_with_flash
from app.core.exceptions import DomainError, InvalidIdError, NotFoundError
from app.crud import client_crud
from app.schemas import client_schema
from app.services.client_service import client_service

router = APIRouter()


@router.get("", response_model=client_schema.ClientListPage, name="list_clients")
async def list_clients(
    request: Request,
    search: str = "",
    sort: str = client_crud.DEFAULT_SORT,
    db: AsyncSession = Depends(deps.get_db),
) -> client_schema.ClientListPage:
    """Lista de clientes con búsqueda (nombre, apellido, dirección) y orden."""
    clients, applied_sort = await client_service.list_clients(db, search=search, sort=sort)
    return client_schema.ClientListPage(
        clients=[client_schema.ClientResponse.model_validate(c) for c in clients],
        search=search,
        sort=applied_sort,
        flash=read_flash(request),
    )


@router.get("/new", response_model=client_schema.ClientFormPage, name="new_client_form")
async def new_client_form(request: Request) -> client_schema.ClientFormPage:
    """Página de alta de cliente."""
    return client_schema.ClientFormPage(flash=read_flash(request))


@router.post("", response_class=RedirectResponse, status_code=status.HTTP_303_SEE_OTHER, name="create_client")
async def create_client(request: Request, db: AsyncSession = Depends(deps.get_db)):
    """Crea un cliente a partir del formulario (firstName, lastName, phone, address)."""
    form = await request.form()
    result = await client_service.create_client(db, form)
    if not result.ok:
        return redirect_with_flash(request, "new_client_form", "error", result.error.message)
    return redirect_with_flash(request, "list_clients", "success", "Client created successfully.")


@router.get("/edit/{client_id}", response_model=client_schema.ClientEditPage, name="edit_client_form")
async def edit_client_form(
    request: Request,
    client_id: str,
    db: AsyncSession = Depends(deps.get_db),
) -> client_schema.ClientEditPage:
    """Página de edición con los datos actuales del cliente."""
    try:
        client = await client_service.get_client(db, client_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return client_schema.ClientEditPage(
        client=client_schema.ClientResponse.model_validate(client),
        flash=read_flash(request),
    )


@router.post("/edit/{client_id}", response_class=RedirectResponse, status_code=status.HTTP_303_SEE_OTHER, name="update_client")
async def update_client(request: Request, client_id: str, db: AsyncSession = Depends(deps.get_db)):
    """Guarda la edición de un cliente."""
    form = await request.form()
    try:
        result = await client_service.update_client(db, client_id, form)
    except (InvalidIdError, NotFoundError) as e:
        return redirect_with_flash(request, "list_clients", "error", e.message)

    if not result.ok:
        return redirect_with_flash(request, "edit_client_form", "error", result.error.message, client_id=client_id)
    return redirect_with_flash(request, "list_clients", "success", "Client updated successfully.")


@router.post("/{client_id}", response_class=RedirectResponse, status_code=status.HTTP_303_SEE_OTHER, name="delete_client")
async def delete_client(request: Request, client_id: str, db: AsyncSession = Depends(deps.get_db)):
    """Elimina un cliente junto con sus pedidos y las líneas de esos pedidos."""
    try:
        result = await client_service.delete_client(db, client_id)
    except DomainError as e:
        return redirect_with_flash(request, "list_clients", "error", e.message)

    return redirect_with_flash(
        request,
        "list_clients",
        "success",
        f"Client and {result.orders_deleted} associated orders deleted successfully.",
    )

# orderdesk/routes/catalog.py
# Товары (/items) и курьеры (/delivery-guys)

from fastapi import APIRouter, Depends, Request, status
from typing import List
from orderdesk.schemas.delivery_guy import DeliveryGuyCreate, DeliveryGuyResponse, DeliveryGuyUpdate
from orderdesk.schemas.item import ItemCreate, ItemResponse, ItemUpdate
from orderdesk.services.catalog import (
    create_delivery_guy_service,
    create_item_service,
    read_delivery_guys_service,
    read_items_service,
    update_delivery_guy_service,
    update_item_service,
)
from orderdesk.routes.auth import get_current_admin, get_current_user

items_router = APIRouter()
delivery_router = APIRouter()

# ────────────── ITEMS ──────────────
@items_router.get("/", response_model=List[ItemResponse], summary="Активные товары")
async def read_items(request: Request, _=Depends(get_current_user)):
    return await read_items_service(request)


@items_router.post(
    "/",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать товар (только администратор)",
    responses={
        403: {"description": "Доступ только для администратора"},
        409: {"description": "Товар с таким названием уже существует"},
    },
)
async def create_item(request: Request, item: ItemCreate, _=Depends(get_current_admin)):
    try:
        return await create_item_service(item, request)
    except Exception as e:
        await request.app.state.log.log_error("item", f"Ошибка при создании товара: {str(e)}")
        raise


@items_router.put(
    "/{id}",
    response_model=ItemResponse,
    summary="Обновить товар (только администратор)",
    responses={
        403: {"description": "Доступ только для администратора"},
        404: {"description": "Товар не найден"},
        409: {"description": "Товар с таким названием уже существует"},
    },
)
async def update_item(id: int, item_update: ItemUpdate, request: Request, _=Depends(get_current_admin)):
    try:
        return await update_item_service(id, item_update, request)
    except Exception as e:
        await request.app.state.log.log_error("item", f"Ошибка при обновлении товара: {str(e)}", {"id": id})
        raise


# ────────────── DELIVERY GUYS ──────────────
@delivery_router.get("/", response_model=List[DeliveryGuyResponse], summary="Активные курьеры")
async def read_delivery_guys(request: Request, _=Depends(get_current_user)):
    return await read_delivery_guys_service(request)


@delivery_router.post(
    "/",
    response_model=DeliveryGuyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Добавить курьера (только администратор)",
    responses={403: {"description": "Доступ только для администратора"}},
)
async def create_delivery_guy(request: Request, delivery_guy: DeliveryGuyCreate, _=Depends(get_current_admin)):
    try:
        return await create_delivery_guy_service(delivery_guy, request)
    except Exception as e:
        await request.app.state.log.log_error("delivery", f"Ошибка при создании курьера: {str(e)}")
        raise


@delivery_router.put(
    "/{id}",
    response_model=DeliveryGuyResponse,
    summary="Обновить курьера (только администратор)",
    responses={
        403: {"description": "Доступ только для администратора"},
        404: {"description": "Курьер не найден"},
    },
)
async def update_delivery_guy(id: int, update: DeliveryGuyUpdate, request: Request, _=Depends(get_current_admin)):
    try:
        return await update_delivery_guy_service(id, update, request)
    except Exception as e:
        await request.app.state.log.log_error("delivery", f"Ошибка при обновлении курьера: {str(e)}", {"id": id})
        raise

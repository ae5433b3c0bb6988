# orderdesk/routes/customer.py

from fastapi import APIRouter, Depends, Request, status
from typing import List
from orderdesk.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from orderdesk.services.customer import (
    create_customer_service,
    deactivate_customer_service,
    read_customer_service,
    read_customers_service,
    update_customer_service,
)
from orderdesk.routes.auth import get_current_admin, get_current_user

router = APIRouter()

# ────────────── READ ALL ──────────────
@router.get(
    "/",
    response_model=List[CustomerResponse],
    summary="Получить список активных клиентов",
    response_description="Агенту — только назначенные ему клиенты",
    responses={401: {"description": "Некорректный пользователь или токен"}},
)
async def read_customers(request: Request, current_user=Depends(get_current_user)):
    try:
        return await read_customers_service(request, current_user)
    except Exception as e:
        await request.app.state.log.log_error("customer", f"Ошибка при получении списка клиентов: {str(e)}")
        raise

# ────────────── READ ONE ──────────────
@router.get(
    "/{id}",
    response_model=CustomerResponse,
    summary="Получить клиента по ID",
    responses={
        401: {"description": "Некорректный пользователь или токен"},
        403: {"description": "Клиент не назначен агенту"},
        404: {"description": "Клиент не найден"},
    },
)
async def read_customer(id: int, request: Request, current_user=Depends(get_current_user)):
    try:
        return await read_customer_service(id, current_user, request)
    except Exception as e:
        await request.app.state.log.log_error("customer", f"Ошибка при получении клиента: {str(e)}", {"id": id})
        raise

# ────────────── CREATE ──────────────
@router.post(
    "/",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать клиента (только администратор)",
    responses={
        400: {"description": "Агент или курьер не найден"},
        403: {"description": "Доступ только для администратора"},
        422: {"description": "Неверные данные запроса"},
    },
)
async def create_customer(request: Request, customer: CustomerCreate, _=Depends(get_current_admin)):
    try:
        return await create_customer_service(customer, request)
    except Exception as e:
        await request.app.state.log.log_error("customer", f"Ошибка при создании клиента: {str(e)}")
        raise

# ────────────── UPDATE ──────────────
@router.put(
    "/{id}",
    response_model=CustomerResponse,
    summary="Обновить клиента (только администратор)",
    responses={
        400: {"description": "Агент или курьер не найден"},
        403: {"description": "Доступ только для администратора"},
        404: {"description": "Клиент не найден"},
    },
)
async def update_customer(id: int, customer_update: CustomerUpdate, request: Request, _=Depends(get_current_admin)):
    try:
        return await update_customer_service(id, customer_update, request)
    except Exception as e:
        await request.app.state.log.log_error("customer", f"Ошибка при обновлении клиента: {str(e)}", {"id": id})
        raise

# ────────────── DELETE (мягкое) ──────────────
@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Деактивировать клиента (только администратор)",
    responses={
        403: {"description": "Доступ только для администратора"},
        404: {"description": "Клиент не найден"},
    },
)
async def delete_customer(id: int, request: Request, _=Depends(get_current_admin)):
    try:
        await deactivate_customer_service(id, request)
    except Exception as e:
        await request.app.state.log.log_error("customer", f"Ошибка при деактивации клиента: {str(e)}", {"id": id})
        raise

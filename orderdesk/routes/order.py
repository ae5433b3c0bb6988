# orderdesk/routes/order.py

from fastapi import APIRouter, Depends, Request, status
from typing import List, Optional
from orderdesk.schemas.order import CustomerStatusResponse, OrderCreate, OrderResponse, OrderUpdate
from orderdesk.services.order import (
    create_order_service,
    order_history_service,
    read_order_service,
    read_orders_service,
    update_order_service,
)
from orderdesk.services.status import status_by_date_service, today_status_service
from orderdesk.routes.auth import get_current_user

router = APIRouter()

# ────────────── READ ALL ──────────────
@router.get(
    "/",
    response_model=List[OrderResponse],
    status_code=status.HTTP_200_OK,
    summary="Получить список заказов",
    response_description="Заказы, новые первыми; агенту — только свои",
    responses={
        200: {"description": "Список заказов успешно получен"},
        400: {"description": "Неверный формат даты"},
        401: {"description": "Некорректный пользователь или токен"},
    },
)
async def read_orders(
    request: Request,
    date: Optional[str] = None,
    customer_id: Optional[int] = None,
    current_user=Depends(get_current_user),
):
    try:
        return await read_orders_service(request, current_user, date, customer_id)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при получении списка заказов: {str(e)}")
        raise


# ────────────── TODAY STATUS ──────────────
@router.get(
    "/today-status",
    response_model=List[CustomerStatusResponse],
    status_code=status.HTTP_200_OK,
    summary="Статусы клиентов за сегодня",
    response_description="Для каждого клиента — последний заказ за текущий рабочий день (UTC+5:30)",
    responses={
        200: {"description": "Статусы получены"},
        401: {"description": "Некорректный пользователь или токен"},
    },
)
async def read_today_status(
    request: Request,
    current_user=Depends(get_current_user),
):
    try:
        return await today_status_service(request, current_user)
    except Exception as e:
        await request.app.state.log.log_error("status", f"Ошибка при получении статусов за сегодня: {str(e)}")
        raise


# ────────────── STATUS BY DATE ──────────────
@router.get(
    "/status-by-date",
    response_model=List[CustomerStatusResponse],
    status_code=status.HTTP_200_OK,
    summary="Статусы клиентов за дату",
    response_description="Для каждого клиента, существовавшего в этот день, — последний заказ дня",
    responses={
        200: {"description": "Статусы получены"},
        400: {"description": "Дата не передана или неверного формата"},
        401: {"description": "Некорректный пользователь или токен"},
    },
)
async def read_status_by_date(
    request: Request,
    date: Optional[str] = None,
    current_user=Depends(get_current_user),
):
    try:
        return await status_by_date_service(request, current_user, date)
    except Exception as e:
        await request.app.state.log.log_error("status", f"Ошибка при получении статусов за дату: {str(e)}", {"date": date})
        raise


# ────────────── HISTORY ──────────────
@router.get(
    "/history/{customer_id}",
    response_model=List[OrderResponse],
    status_code=status.HTTP_200_OK,
    summary="История заказов клиента",
    responses={
        200: {"description": "История получена"},
        401: {"description": "Некорректный пользователь или токен"},
        403: {"description": "Клиент не назначен агенту"},
    },
)
async def read_order_history(
    customer_id: int,
    request: Request,
    current_user=Depends(get_current_user),
):
    try:
        return await order_history_service(customer_id, current_user, request)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при получении истории заказов: {str(e)}", {"customer_id": customer_id})
        raise


# ────────────── READ ONE ──────────────
@router.get(
    "/{id}",
    response_model=OrderResponse,
    status_code=status.HTTP_200_OK,
    summary="Получить заказ по ID",
    responses={
        200: {"description": "Заказ найден и возвращён"},
        401: {"description": "Некорректный пользователь или токен"},
        403: {"description": "Заказ другого агента"},
        404: {"description": "Заказ не найден"},
    },
)
async def read_order(
    id: int,
    request: Request,
    current_user=Depends(get_current_user),
):
    try:
        return await read_order_service(id, current_user, request)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при получении заказа: {str(e)}", {"id": id})
        raise


# ────────────── CREATE ──────────────
@router.post(
    "/",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать заказ",
    response_description="Созданный заказ со связанными записями",
    responses={
        201: {"description": "Заказ успешно создан"},
        400: {"description": "Недопустимый начальный статус"},
        401: {"description": "Некорректный пользователь или токен"},
        403: {"description": "Клиент не назначен агенту"},
        404: {"description": "Клиент или товар не найден"},
        422: {"description": "Неверные данные запроса"},
    },
)
async def create_order(
    request: Request,
    order: OrderCreate,
    current_user=Depends(get_current_user),
):
    try:
        return await create_order_service(order, current_user, request)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при создании заказа: {str(e)}")
        raise


# ────────────── UPDATE ──────────────
@router.put(
    "/{id}",
    response_model=OrderResponse,
    status_code=status.HTTP_200_OK,
    summary="Обновить заказ / сменить статус",
    response_description="Обновлённый заказ",
    responses={
        200: {"description": "Заказ успешно обновлён"},
        400: {"description": "Недопустимый переход статуса или не хватает полей"},
        401: {"description": "Некорректный пользователь или токен"},
        403: {"description": "Заказ другого агента"},
        404: {"description": "Заказ или товар не найден"},
        409: {"description": "Заказ изменён параллельным запросом"},
        422: {"description": "Неверные данные запроса"},
    },
)
async def update_order(
    id: int,
    order_update: OrderUpdate,
    request: Request,
    current_user=Depends(get_current_user),
):
    try:
        return await update_order_service(id, order_update, current_user, request)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при обновлении заказа: {str(e)}", {"id": id})
        raise

# orderdesk/routes/agent.py

from fastapi import APIRouter, Depends, Request, status
from typing import List
from orderdesk.schemas.user import AgentCreate, AgentUpdate, UserResponse
from orderdesk.services.profile import create_agent_service, read_agents_service, update_agent_service
from orderdesk.routes.auth import get_current_admin

router = APIRouter()

# Все операции с агентами — только для администратора

@router.get(
    "/",
    response_model=List[UserResponse],
    summary="Список агентов",
    responses={403: {"description": "Доступ только для администратора"}},
)
async def read_agents(request: Request, _=Depends(get_current_admin)):
    return await read_agents_service(request)


@router.post(
    "/",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать агента",
    responses={
        403: {"description": "Доступ только для администратора"},
        409: {"description": "Логин уже занят"},
        422: {"description": "Ошибка валидации данных"},
    },
)
async def create_agent(agent: AgentCreate, request: Request, _=Depends(get_current_admin)):
    """
    Пароль хэшируется перед сохранением, роль всегда `agent`.
    """
    try:
        return await create_agent_service(agent, request)
    except Exception as e:
        await request.app.state.log.log_error("agent", f"Ошибка при создании агента: {str(e)}", {"login": agent.login})
        raise


@router.put(
    "/{id}",
    response_model=UserResponse,
    summary="Обновить агента",
    responses={
        403: {"description": "Доступ только для администратора"},
        404: {"description": "Агент не найден"},
        409: {"description": "Логин уже занят"},
    },
)
async def update_agent(id: int, agent_update: AgentUpdate, request: Request, _=Depends(get_current_admin)):
    try:
        return await update_agent_service(id, agent_update, request)
    except Exception as e:
        await request.app.state.log.log_error("agent", f"Ошибка при обновлении агента: {str(e)}", {"id": id})
        raise

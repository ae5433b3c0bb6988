# orderdesk/routes/auth.py

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from jwt import ExpiredSignatureError, InvalidTokenError

from orderdesk.schemas.user import TokenResponse, UserResponse
from orderdesk.services.policy import require_admin
from orderdesk.services.profile import read_user_by_login
from orderdesk.utils.security import create_access_token, decode_access_token, verify_password

router = APIRouter()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


async def get_current_user(request: Request, token: str = Depends(oauth2_scheme)):
    """
    Проверяет JWT токен и возвращает активного пользователя (principal).

    **Статусы:**
    - 401 Unauthorized – токен истёк, неверный, без login или пользователь не найден
    """
    log = request.app.state.log
    try:
        payload = decode_access_token(token)
        login: str = payload.get("sub")
        if login is None:
            await log.log_error("auth", "Токен не содержит login")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    except ExpiredSignatureError:
        await log.log_warning("auth", "Токен истёк")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except InvalidTokenError:
        await log.log_warning("auth", "Неверный токен")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token invalid")

    user = await read_user_by_login(login, request)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    return user


async def get_current_admin(current_user=Depends(get_current_user)):
    """Только администратор, иначе 403."""
    require_admin(current_user)
    return current_user


# ────────────── TOKEN ──────────────
@router.post(
    "/token",
    response_model=TokenResponse,
    summary="Получение JWT токена (авторизация пользователя)",
    responses={
        200: {"description": "Токен выдан: access_token, token_type и данные пользователя"},
        401: {"description": "Неверный логин или пароль"},
        422: {"description": "Ошибка валидации входных данных"},
    }
)
async def login_for_access_token(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends()
):
    """
    Авторизация администратора или агента.

    **Входные данные (form-data):**
    - `username`: str — логин
    - `password`: str — пароль

    **Выходные данные:** `access_token`, `token_type` (`"bearer"`), `user`.
    """
    log = request.app.state.log

    user = await read_user_by_login(form_data.username, request)
    if user is None or not verify_password(form_data.password, user.password):
        await log.log_warning("auth", "Неудачная попытка входа", {"username": form_data.username})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"}
        )

    access_token = create_access_token(data={"sub": user.login, "role": user.role})
    await log.log_info("auth", "Пользователь авторизован", {"id": user.id, "role": user.role})

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": user,
    }


# ────────────── ME ──────────────
@router.get(
    "/me",
    response_model=UserResponse,
    summary="Текущий пользователь",
    responses={401: {"description": "Токен невалиден"}},
)
async def read_me(current_user=Depends(get_current_user)):
    return current_user

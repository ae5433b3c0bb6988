# orderdesk/utils/security.py

"""
Пароли и JWT-токены.

Пароли хэшируются через passlib (sha256_crypt, без проблем bcrypt на Windows),
число раундов задаётся AUTH_HASH_ROUNDS. Токены подписываются HS256 (PyJWT).
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jwt import encode, decode
from passlib.context import CryptContext

from orderdesk.config import settings

ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["sha256_crypt"],
    deprecated="auto",
    sha256_crypt__default_rounds=settings.AUTH_HASH_ROUNDS,
)


def hash_password(password: str) -> str:
    """
    Хэширует пароль.

    :param password: строка пароля пользователя
    :return: хэш пароля
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Проверяет пароль по хэшу из базы.

    :return: True если пароль совпадает, иначе False
    """
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    JWT на основе данных пользователя, например {"sub": "login", "role": "agent"}.
    По умолчанию живёт AUTH_TOKEN_EXPIRE_MINUTES.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.AUTH_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return encode(to_encode, settings.AUTH_SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Декодирует токен; ExpiredSignatureError / InvalidTokenError пробрасываются."""
    return decode(token, settings.AUTH_SECRET_KEY, algorithms=[ALGORITHM])

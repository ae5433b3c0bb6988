# orderdesk/utils/database.py

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.future import select
from orderdesk.config import settings
from orderdesk.utils.security import hash_password

# ────────────── Base для моделей ──────────────
Base = declarative_base()  # базовый класс для всех моделей SQLAlchemy

# ────────────── Асинхронный движок ──────────────
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO
)

# ────────────── Асинхронная сессия ──────────────
# expire_on_commit=False: после commit объекты остаются читаемыми
# без ленивой подгрузки (в async она недоступна)
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False
)


def _import_models():
    # регистрация всех таблиц в Base.metadata
    from orderdesk.models import customer, delivery_guy, item, order, user  # noqa: F401


# ────────────── Инициализация базы данных ──────────────
async def init_db() -> bool:
    """
    Создаёт все таблицы (если ещё не созданы).
    Если в базе нет ни одного администратора — создаёт его
    с логином AUTH_LOGIN и паролем AUTH_PASSWORD (хранится хэш).

    Возвращает True, если администратор был создан.
    """
    _import_models()
    from orderdesk.models.user import Role, User

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.role == Role.ADMIN.value).limit(1))
        if result.scalar_one_or_none() is not None:
            return False

        admin_user = User(
            name="Administrator",
            phone="0000000000",
            login=settings.AUTH_LOGIN,
            password=hash_password(settings.AUTH_PASSWORD),
            role=Role.ADMIN.value,
        )
        session.add(admin_user)
        await session.commit()
        return True


async def drop_db():
    """Удаляет все таблицы и закрывает соединения пула."""
    _import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


async def close_db():
    await engine.dispose()

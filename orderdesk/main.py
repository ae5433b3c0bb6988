# orderdesk/main.py

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
from dotenv import load_dotenv
from contextlib import asynccontextmanager

# --- загрузка переменных окружения (до чтения settings) ---
load_dotenv()

from orderdesk.config import settings
from orderdesk.utils.errors import OrderDeskError
from orderdesk.utils.log import Log
from orderdesk.utils.database import close_db, init_db
from orderdesk.middleware.db_middleware import DBSessionMiddleware

import os
import multiprocessing

# --- sync логгер для раннего старта ---
boot_log = Log()
if os.environ.get("RUN_MAIN") == "true" or multiprocessing.current_process().name == "MainProcess":
    boot_log.log_info_sync(target="startup", message="Импорты main.py выполнены")

# ────────────── Lifespan ──────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    boot_log.log_info_sync(target="startup", message="lifespan: startup начат")

    # Инициализация БД и первого администратора
    admin_created = await init_db()
    boot_log.log_info_sync(
        target="startup",
        message="База инициализирована",
        data={"admin_created": admin_created},
    )

    app.state.log = Log()
    await app.state.log.log_info(target="startup", message="Async Log инициализирован")

    yield

    # shutdown
    await app.state.log.log_info(target="shutdown", message="Остановка приложения")
    await app.state.log.shutdown()
    await close_db()
    boot_log.log_info_sync(target="shutdown", message="Log и пул соединений закрыты")

# ────────────── Создаём FastAPI приложение ──────────────
app = FastAPI(title="Order Desk API", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# DB middleware для request.state.db
app.add_middleware(DBSessionMiddleware)

# ────────────── Ошибки предметной области → JSON ──────────────
@app.exception_handler(OrderDeskError)
async def order_desk_error_handler(request: Request, exc: OrderDeskError):
    log = getattr(request.app.state, "log", None)
    if log:
        await log.log_warning(
            "http",
            f"{type(exc).__name__}: {exc.message}",
            {"path": request.url.path, "status": exc.status_code},
            is_console=False,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())

@app.get("/health")
def health():
    return {"status": "ok", "message": "Server is running"}

# ────────────── Подключение роутов ──────────────
from orderdesk.routes import agent, auth, catalog, customer, order

app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(agent.router, prefix="/agents", tags=["agents"])
app.include_router(customer.router, prefix="/customers", tags=["customers"])
app.include_router(catalog.delivery_router, prefix="/delivery-guys", tags=["delivery-guys"])
app.include_router(catalog.items_router, prefix="/items", tags=["items"])
app.include_router(order.router, prefix="/orders", tags=["orders"])

# ────────────── Запуск uvicorn ──────────────
if __name__ == "__main__":
    boot_log.log_info_sync(target="startup", message="Запуск uvicorn.run")
    uvicorn.run(
        "orderdesk.main:app",
        host="127.0.0.1",
        port=8000,
        log_level="info",
        reload=True
    )

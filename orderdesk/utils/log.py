# orderdesk/utils/log.py
# Журнал событий сервиса заказов

import os
import datetime
import enum
import logging
from aiologger import Logger
from aiologger.handlers.files import AsyncFileHandler

from orderdesk.config import settings

class Log:
    """
    Журнал по дням: <LOG_DIR>/<год>/<месяц>/<день>.log.

    На каждый target свой aiologger.Logger; при смене дня он
    пересоздаётся на новый файл. Строка журнала:
    "04.10.2025 12:00:00 INFO order: Заказ создан: {...}".
    """

    def __init__(self, log_dir: str | None = None):
        self.log_dir = log_dir or settings.LOG_DIR
        os.makedirs(self.log_dir, exist_ok=True)
        self.handlers = {}
        self.log_print = str(settings.LOG_PRINT).lower() in ("1", "true", "yes")

    def build_log_path(self, now: datetime.datetime) -> str:
        base_dir = os.path.join(self.log_dir, f"{now.year}", f"{now:%m}")
        os.makedirs(base_dir, exist_ok=True)
        return os.path.join(base_dir, f"{now:%d}.log")

    def format_line(self, now: datetime.datetime, level: str, target: str, message: str, data: dict | None) -> str:
        line = f"{now:%d.%m.%Y %H:%M:%S} {level.upper()} {target}: {message}"
        if data:
            line += f": {self.safe_serialize(data)}"
        return line

    async def get_logger(self, target: str, now: datetime.datetime) -> Logger:
        log_path = self.build_log_path(now)

        current = self.handlers.get(target)
        if current is None or current["path"] != log_path:
            target_logger = Logger(name=f"orderdesk_{target}")
            target_logger.add_handler(AsyncFileHandler(filename=log_path, mode="a", encoding="utf-8"))
            if current is not None:
                await current["logger"].shutdown()
            self.handlers[target] = {"path": log_path, "logger": target_logger}

        return self.handlers[target]["logger"]

    def _echo(self, line: str, is_console: bool | None):
        if self.log_print if is_console is None else is_console:
            print(line)

    async def _emit(self, level: str, target: str, message: str, data: dict | None, is_console: bool | None):
        now = datetime.datetime.now()
        line = self.format_line(now, level, target, message, data)
        target_logger = await self.get_logger(target, now)
        await getattr(target_logger, level)(line)
        self._echo(line, is_console)

    # Асинхронное
    async def log_info(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool = None):
        await self._emit("info", target, message, data, is_console)

    async def log_warning(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool = None):
        await self._emit("warning", target, message, data, is_console)

    async def log_error(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool = True):
        # ошибки всегда в консоль, если не сказано иначе
        await self._emit("error", target, message, data, is_console)

    # Синхронное: старт и остановка приложения, вне event loop
    def _emit_sync(self, level: str, target: str, message: str, data: dict | None, is_console: bool | None):
        now = datetime.datetime.now()
        line = self.format_line(now, level, target, message, data)

        sync_logger = logging.getLogger(f"orderdesk_sync_{target}")
        sync_logger.setLevel(logging.INFO)
        sync_logger.propagate = False
        if not sync_logger.handlers:
            handler = logging.FileHandler(self.build_log_path(now), mode="a", encoding="utf-8")
            handler.setFormatter(logging.Formatter("%(message)s"))
            sync_logger.addHandler(handler)

        getattr(sync_logger, level)(line)
        self._echo(line, is_console)

    def log_info_sync(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool = None):
        self._emit_sync("info", target, message, data, is_console)

    def log_error_sync(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool = None):
        self._emit_sync("error", target, message, data, is_console)

    def safe_serialize(self, obj):
        """
        Значение для строки журнала.
        Enum -> value, datetime -> ISO, Pydantic -> model_dump,
        ORM-объекты -> публичные атрибуты, неизвестное -> <ИмяТипа>.
        """
        if obj is None or isinstance(obj, (str, int, float, bool)) and not isinstance(obj, enum.Enum):
            return obj
        if isinstance(obj, enum.Enum):
            return obj.value
        if isinstance(obj, (datetime.datetime, datetime.date)):
            return obj.isoformat()
        if isinstance(obj, dict):
            return {k: self.safe_serialize(v) for k, v in obj.items()}
        if isinstance(obj, (list, tuple, set)):
            return [self.safe_serialize(v) for v in obj]
        if hasattr(obj, "model_dump"):
            return self.safe_serialize(obj.model_dump())
        if hasattr(obj, "__dict__"):
            # служебные атрибуты SQLAlchemy начинаются с "_"
            return {k: self.safe_serialize(v) for k, v in vars(obj).items() if not k.startswith("_")}
        return f"<{type(obj).__name__}>"

    async def shutdown(self):
        for entry in list(self.handlers.values()):
            await entry["logger"].shutdown()
        self.handlers.clear()

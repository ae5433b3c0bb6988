import asyncio
import datetime

from orderdesk.models.order import OrderStatus
from orderdesk.utils.log import Log


def test_line_format_and_serialization(tmp_path):
    log = Log(log_dir=str(tmp_path))
    now = datetime.datetime(2025, 10, 4, 12, 0, 0)

    line = log.format_line(now, "warning", "order", "Конфликт", {"status": OrderStatus.CALLED, "at": now})

    assert line == "04.10.2025 12:00:00 WARNING order: Конфликт: {'status': 'called', 'at': '2025-10-04T12:00:00'}"
    assert log.build_log_path(now) == str(tmp_path / "2025" / "10" / "04.log")


def test_async_entries_land_in_daily_file(tmp_path):
    log = Log(log_dir=str(tmp_path))

    async def write():
        await log.log_info("order", "Заказ создан", {"id": 1}, is_console=False)
        await log.log_error("order", "Сбой", is_console=False)
        await log.shutdown()

    asyncio.run(write())

    (log_file,) = tmp_path.rglob("*.log")
    content = log_file.read_text(encoding="utf-8")
    assert "INFO order: Заказ создан: {'id': 1}" in content
    assert "ERROR order: Сбой" in content

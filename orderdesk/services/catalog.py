# orderdesk/services/catalog.py
# Справочники: товары и курьеры

from sqlalchemy.exc import IntegrityError
from sqlalchemy.future import select
from fastapi import Request

from orderdesk.models.delivery_guy import DeliveryGuy as DeliveryGuyModel
from orderdesk.models.item import Item as ItemModel
from orderdesk.schemas.delivery_guy import DeliveryGuyCreate, DeliveryGuyUpdate
from orderdesk.schemas.item import ItemCreate, ItemUpdate
from orderdesk.utils.errors import ConflictError, NotFoundError


# ────────────── Товары ──────────────
async def read_items_service(request: Request) -> list[ItemModel]:
    db = request.state.db
    result = await db.execute(select(ItemModel).where(ItemModel.is_active.is_(True)).order_by(ItemModel.name))
    return result.scalars().all()


async def _save_item(db, log, db_item: ItemModel, message: str) -> ItemModel:
    name = db_item.name
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        await log.log_warning("item", "Товар с таким названием уже есть", {"name": name})
        raise ConflictError("Item already exists")
    await db.refresh(db_item)
    await log.log_info("item", message, {"id": db_item.id})
    return db_item


async def create_item_service(item: ItemCreate, request: Request) -> ItemModel:
    db = request.state.db
    log = request.app.state.log

    db_item = ItemModel(name=item.name.strip())
    db.add(db_item)
    return await _save_item(db, log, db_item, "Товар создан")


async def update_item_service(id: int, item_update: ItemUpdate, request: Request) -> ItemModel:
    db = request.state.db
    log = request.app.state.log

    db_item = await db.get(ItemModel, id)
    if db_item is None:
        raise NotFoundError("Item not found")

    for key, value in item_update.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(db_item, key, value.strip() if key == "name" else value)

    return await _save_item(db, log, db_item, "Товар обновлён")


# ────────────── Курьеры ──────────────
async def read_delivery_guys_service(request: Request) -> list[DeliveryGuyModel]:
    db = request.state.db
    result = await db.execute(
        select(DeliveryGuyModel).where(DeliveryGuyModel.is_active.is_(True)).order_by(DeliveryGuyModel.id)
    )
    return result.scalars().all()


async def create_delivery_guy_service(delivery_guy: DeliveryGuyCreate, request: Request) -> DeliveryGuyModel:
    db = request.state.db
    log = request.app.state.log

    db_delivery_guy = DeliveryGuyModel(**delivery_guy.model_dump())
    db.add(db_delivery_guy)
    await db.commit()
    await db.refresh(db_delivery_guy)

    await log.log_info("delivery", "Курьер создан", {"id": db_delivery_guy.id})
    return db_delivery_guy


async def update_delivery_guy_service(id: int, update: DeliveryGuyUpdate, request: Request) -> DeliveryGuyModel:
    db = request.state.db
    log = request.app.state.log

    db_delivery_guy = await db.get(DeliveryGuyModel, id)
    if db_delivery_guy is None:
        raise NotFoundError("Delivery guy not found")

    for key, value in update.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(db_delivery_guy, key, value)

    await db.commit()
    await db.refresh(db_delivery_guy)
    await log.log_info("delivery", "Курьер обновлён", {"id": id})
    return db_delivery_guy

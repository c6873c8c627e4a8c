# app/products.py
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from loguru import logger
from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_session, migrate
from .models import Product
from .params import first_value

router = APIRouter(prefix="/products", tags=["products"])

# unsigned 64-bit, the range of the MySQL price column
PRICE_MAX = 2**64 - 1


def parse_uint(raw: str) -> int:
    """Parse a form value as a non-negative price; anything unparseable is 0."""
    if not (raw.isascii() and raw.isdigit()):
        return 0
    value = int(raw)
    return value if value <= PRICE_MAX else 0


def parse_id(raw: str) -> int | None:
    if not (raw.isascii() and raw.isdigit()):
        return None
    return int(raw)


async def first_product(session: AsyncSession, product_id: int | None) -> Product | None:
    if product_id is None:
        return None
    result = await session.execute(
        select(Product)
        .where(Product.id == product_id, Product.deleted_at.is_(None))
        .order_by(Product.id)
        .limit(1)
    )
    return result.scalar_one_or_none()


# Declared before /{product_id} so "migrate" is never read as an id
@router.get("/migrate", response_class=PlainTextResponse)
async def migrate_products():
    try:
        await migrate()
    except SQLAlchemyError as exc:
        raise RuntimeError("database migrate error") from exc
    return "migrated"


@router.get("/{product_id}", response_class=PlainTextResponse)
async def get_product(product_id: str, session: AsyncSession = Depends(get_session)):
    product = await first_product(session, parse_id(product_id))
    logger.debug("fetched {}", product)

    # a miss renders the zero value, same as an empty record
    code = product.code if product else ""
    price = product.price if product else 0
    return f"code: {code}, price: {price}"


@router.post("/register", response_class=PlainTextResponse)
async def register_product(request: Request, session: AsyncSession = Depends(get_session)):
    form = await request.form()
    session.add(Product(code=first_value(form, "code"), price=parse_uint(first_value(form, "price"))))
    await session.commit()
    return "register product."


@router.post("/update", response_class=PlainTextResponse)
async def update_product(request: Request, session: AsyncSession = Depends(get_session)):
    form = await request.form()
    product = await first_product(session, parse_id(first_value(form, "id")))
    if product is not None:
        product.price = parse_uint(first_value(form, "price"))
        await session.commit()
    return "updated."


@router.post("/delete", response_class=PlainTextResponse)
async def delete_product(request: Request, session: AsyncSession = Depends(get_session)):
    target_id = parse_id(first_value(await request.form(), "id"))
    if target_id is not None:
        await session.execute(
            update(Product)
            .where(Product.id == target_id, Product.deleted_at.is_(None))
            .values(deleted_at=func.now())
        )
        await session.commit()
    return "deleted."

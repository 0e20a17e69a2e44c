import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quickcreate.core.config import settings
from quickcreate.core.enums import VAT_EXCEPTION_LABELS
from quickcreate.core.exceptions import DuplicateReference, RelatedRecordNotFound
from quickcreate.core.models import Family, Manufacturer, Product, Tax

from .schemas import OptionItem, ProductCreate, ProductOptionsResponse, ProductResponse

logger = logging.getLogger(__name__)


async def _check_exists(db: AsyncSession, model, code: Optional[str], label: str) -> Optional[str]:
    code = (code or "").strip()
    if not code:
        return None
    if not await db.get(model, code):
        raise RelatedRecordNotFound(f"{label} '{code}' not found")
    return code


async def create_product(db: AsyncSession, payload: ProductCreate) -> ProductResponse:
    reference = payload.reference.strip()
    existing = await db.execute(select(Product.id).where(Product.reference == reference))
    if existing.first() is not None:
        raise DuplicateReference(reference)

    product = Product(
        reference=reference,
        description=payload.description.strip(),
        price=payload.price,
        family_code=await _check_exists(db, Family, payload.family_code, "Family"),
        manufacturer_code=await _check_exists(db, Manufacturer, payload.manufacturer_code, "Manufacturer"),
        tax_code=await _check_exists(db, Tax, payload.tax_code, "Tax"),
        vat_exception=payload.vat_exception.value if payload.vat_exception else None,
    )
    db.add(product)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateReference(reference)
    await db.refresh(product)
    logger.info("Product created", extra={"reference": product.reference, "product_id": product.id})
    return ProductResponse.model_validate(product)


async def get_product_options(db: AsyncSession) -> ProductOptionsResponse:
    families = await db.execute(select(Family).order_by(Family.description))
    manufacturers = await db.execute(select(Manufacturer).order_by(Manufacturer.name))
    taxes = await db.execute(select(Tax).order_by(Tax.description))
    return ProductOptionsResponse(
        families=[OptionItem(value=f.code, label=f.description) for f in families.scalars().all()],
        manufacturers=[OptionItem(value=m.code, label=m.name) for m in manufacturers.scalars().all()],
        taxes=[OptionItem(value=t.code, label=t.description) for t in taxes.scalars().all()],
        exceptions=[OptionItem(value=key.value, label=label) for key, label in VAT_EXCEPTION_LABELS.items()],
        default_tax=settings.default_tax_code,
    )

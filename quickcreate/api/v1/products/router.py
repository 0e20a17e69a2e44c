from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from quickcreate.auth.rbac import check_permission
from quickcreate.core.exceptions import ServiceError
from quickcreate.db.session import get_db

from .schemas import ProductCreate, ProductOptionsResponse, ProductResponse
from . import service

router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.get(
    "/options",
    response_model=ProductOptionsResponse,
    dependencies=[Depends(check_permission("products", "create"))],
)
async def get_product_options(db: AsyncSession = Depends(get_db)) -> ProductOptionsResponse:
    """Families, manufacturers and taxes for the quick-create product dialog."""
    return await service.get_product_options(db)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("products", "create"))],
)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
) -> ProductResponse:
    try:
        return await service.create_product(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

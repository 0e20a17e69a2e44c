from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from quickcreate.core.enums import VatException


class ProductCreate(BaseModel):
    """Quick-create a product from a sales/purchase document. reference must be unique."""

    reference: str = Field(..., min_length=1, max_length=30)
    description: str = Field("", max_length=255)
    price: Decimal = Field(Decimal("0"), ge=0)
    family_code: Optional[str] = Field(None, max_length=8)
    manufacturer_code: Optional[str] = Field(None, max_length=8)
    tax_code: Optional[str] = Field(None, max_length=10)
    vat_exception: Optional[VatException] = None


class ProductResponse(BaseModel):
    id: int
    reference: str
    description: str
    price: Decimal
    family_code: Optional[str] = None
    manufacturer_code: Optional[str] = None
    tax_code: Optional[str] = None
    vat_exception: Optional[str] = None

    class Config:
        from_attributes = True


class OptionItem(BaseModel):
    value: str
    label: str


class ProductOptionsResponse(BaseModel):
    """Select options for the product dialog."""

    families: List[OptionItem] = Field(default_factory=list)
    manufacturers: List[OptionItem] = Field(default_factory=list)
    taxes: List[OptionItem] = Field(default_factory=list)
    exceptions: List[OptionItem] = Field(default_factory=list)
    default_tax: Optional[str] = None

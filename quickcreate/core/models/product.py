from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String

from quickcreate.db.session import Base


class Family(Base):
    __tablename__ = "families"

    code = Column(String(8), primary_key=True)
    description = Column(String(100), nullable=False)


class Manufacturer(Base):
    __tablename__ = "manufacturers"

    code = Column(String(8), primary_key=True)
    name = Column(String(100), nullable=False)


class Tax(Base):
    """Tax type a product can reference. Rates are informational; no tax computation happens here."""

    __tablename__ = "taxes"

    code = Column(String(10), primary_key=True)
    description = Column(String(50), nullable=False)
    rate = Column(Numeric(6, 2), nullable=False, default=0)


class Product(Base):
    """Product created inline from a sales/purchase document. Reference is globally unique."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    reference = Column(String(30), unique=True, nullable=False, index=True)
    description = Column(String(255), nullable=False, default="")
    price = Column(Numeric(14, 4), nullable=False, default=0)
    family_code = Column(String(8), ForeignKey("families.code", ondelete="SET NULL"), nullable=True)
    manufacturer_code = Column(String(8), ForeignKey("manufacturers.code", ondelete="SET NULL"), nullable=True)
    tax_code = Column(String(10), ForeignKey("taxes.code", ondelete="SET NULL"), nullable=True)
    vat_exception = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

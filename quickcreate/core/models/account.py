from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from quickcreate.db.session import Base


class Account(Base):
    """Chart-of-accounts node (cuenta), scoped to one exercise. Managed elsewhere; read-only here."""

    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("code", "exercise_id", name="uq_account_code_exercise"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(20), nullable=False, index=True)
    description = Column(String(255), nullable=False, default="")
    exercise_id = Column(Integer, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False)
    # Upper level in the account tree, if any
    parent_id = Column(Integer, ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True)

    exercise = relationship("Exercise", backref="accounts")
    parent = relationship("Account", remote_side=[id])


class Subaccount(Base):
    """
    Leaf ledger account (subcuenta). Code length always equals the exercise's
    subaccount_code_length, and (code, exercise_id) is unique.
    """

    __tablename__ = "subaccounts"
    __table_args__ = (
        UniqueConstraint("code", "exercise_id", name="uq_subaccount_code_exercise"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(20), nullable=False, index=True)
    description = Column(String(255), nullable=False, default="")
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)
    account_code = Column(String(20), nullable=False)  # Denormalised parent code
    exercise_id = Column(Integer, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    account = relationship("Account", backref="subaccounts")

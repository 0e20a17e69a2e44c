from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Integer, String

from quickcreate.core.enums import ExerciseStatus
from quickcreate.db.session import Base


class Exercise(Base):
    """
    Fiscal exercise (ejercicio). Defines the fixed code length of every
    sub-account created within it. CLOSED exercises are read-only.
    """

    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(10), unique=True, nullable=False, index=True)  # e.g. "2025"
    name = Column(String(100), nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    subaccount_code_length = Column(Integer, nullable=False, default=10)
    status = Column(String(20), nullable=False, default=ExerciseStatus.OPEN.value)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    @property
    def is_open(self) -> bool:
        return self.status == ExerciseStatus.OPEN.value

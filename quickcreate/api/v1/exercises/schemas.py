from datetime import date
from typing import Optional

from pydantic import BaseModel


class ExerciseResponse(BaseModel):
    id: int
    code: str
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    subaccount_code_length: int
    status: str

    class Config:
        from_attributes = True

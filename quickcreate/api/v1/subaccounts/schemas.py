from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class SubaccountCreate(BaseModel):
    """
    Create a sub-account under a known parent account.
    code accepts dot notation ("430.1"); leave it empty to allocate the next free code.
    exercise_id defaults to the parent account's exercise.
    """

    parent_account_id: int = Field(..., description="Parent account id")
    code: Optional[str] = Field(None, max_length=30, description="Full code or dot notation, e.g. 430.1")
    description: Optional[str] = Field(None, max_length=255, description="Defaults to the parent account description")
    exercise_id: Optional[int] = Field(None, description="Target exercise; defaults to the parent's exercise")


class SubaccountFromCodeCreate(BaseModel):
    """Create a sub-account from its full code; the parent account is found by prefix."""

    code: str = Field(..., min_length=1, max_length=30, description="Full code or dot notation")
    description: Optional[str] = Field(None, max_length=255)
    exercise_id: int


class SubaccountResponse(BaseModel):
    id: int
    code: str
    description: str
    account_id: int
    account_code: str
    exercise_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SubaccountSearchItem(BaseModel):
    id: int
    code: str
    description: str

    class Config:
        from_attributes = True


class SubaccountSearchResponse(BaseModel):
    results: List[SubaccountSearchItem] = Field(default_factory=list)
    suggested_code: Optional[str] = Field(
        None,
        description="Next free code under the account typed as prefix (e.g. 430 or 430.), if that account exists",
    )


class TransformResponse(BaseModel):
    code: str
    transformed: str
    length: int

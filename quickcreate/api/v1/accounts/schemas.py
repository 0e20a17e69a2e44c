from pydantic import BaseModel


class AccountResponse(BaseModel):
    id: int
    code: str
    description: str
    exercise_id: int

    class Config:
        from_attributes = True


class NextFreeCodeResponse(BaseModel):
    """Suggested (not yet persisted) sub-account code under an account."""

    code: str
    parent_code: str
    description: str

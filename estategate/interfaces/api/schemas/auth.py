"""Authentication related schemas."""

from pydantic import BaseModel, Field


class Token(BaseModel):
    access_token: str
    token_type: str
    role: str
    estate_id: int | None = None
    must_change_password: bool


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)


class MessageResponse(BaseModel):
    message: str

from pydantic import BaseModel, Field
from datetime import datetime


class LoginRequest(BaseModel):
    identity: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str
    identity: str
    user_name: str


class UserCreate(BaseModel):
    identity: str = Field(..., min_length=1)
    name: str
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    id: int
    identity: str
    name: str
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}

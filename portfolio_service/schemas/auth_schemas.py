# schemas/auth_schemas.py

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Seconds until the token expires")


class PrivateItemCreate(BaseModel):
    type: str = Field(..., min_length=1, max_length=50, description="e.g. note, link, file")
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field("", max_length=20000)


class PrivateItemUpdate(BaseModel):
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, max_length=20000)


class PrivateItem(PrivateItemCreate):
    id: str
    owner: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class PrivateItemsResponse(BaseModel):
    items: List[PrivateItem]

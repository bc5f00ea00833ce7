# calc_api/schemas.py
from datetime import datetime
from enum import Enum
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

class UserOS(str, Enum):
    IOS = "ios"
    ANDROID = "android"

# request bodies
class UserCreate(BaseModel):
    os: UserOS

class TransactionCreate(BaseModel):
    calculation: str = Field(..., min_length=1, max_length=255)

# responses
class UserHandle(BaseModel):
    uuid: UUID

class UserCreated(BaseModel):
    user: UserHandle

class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: UUID
    os: str
    created_at: datetime

class UserEnvelope(BaseModel):
    user: UserRead

class TransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    calculation: str

class TransactionList(BaseModel):
    transactions: List[TransactionRead]

class Message(BaseModel):
    message: str

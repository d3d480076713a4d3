from sqlmodel import SQLModel, Field, Column
import uuid
from typing import Optional
import sqlalchemy as sa
from datetime import datetime, timezone

def utc_now():
    return datetime.now(timezone.utc)

class Customer(SQLModel, table=True):
    __tablename__ = "customers"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    first_name: str = Field(index=True)
    last_name: str = Field(index=True)
    email: Optional[str] = None
    phone: Optional[str] = None

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(sa.DateTime(timezone=True))
    )

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional
import uuid
from datetime import datetime


class CustomerInput(BaseModel):
    """Body of create and update requests.

    The names are optional here so that a missing name is reported through
    the endpoint's own validation rather than as a framework 422.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    def is_valid(self) -> bool:
        return bool(
            self.first_name and self.first_name.strip()
            and self.last_name and self.last_name.strip()
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class CustomerInfo(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: uuid.UUID
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime

from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field, model_validator


class ReceiptCreate(BaseModel):
    image_url: str = Field(min_length=1)
    store_name: str | None = None
    purchase_date: date | None = None
    total_amount: float | None = Field(None, ge=0)


class ReceiptUpdate(BaseModel):
    image_url: str | None = Field(None, min_length=1)
    store_name: str | None = None
    purchase_date: date | None = None
    total_amount: float | None = Field(None, ge=0)

    @model_validator(mode="after")
    def _image_not_nulled(self):
        if "image_url" in self.model_fields_set and self.image_url is None:
            raise ValueError("image_url cannot be cleared")
        return self


class ReceiptResponse(BaseModel):
    id: UUID
    owner_id: UUID
    image_url: str
    store_name: str | None
    purchase_date: date | None
    total_amount: float | None
    uploaded_at: datetime

    model_config = {"from_attributes": True, "frozen": True}

from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_UNIT = "piece(s)"


def _coerce_date(value):
    # Clients send full ISO timestamps for what is a calendar date
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


class FoodItemCreate(BaseModel):
    name: str = Field(min_length=1)
    expiry_date: date
    quantity: float = Field(1.0, gt=0)
    unit: str | None = Field(None, validate_default=True)
    category: str | None = None
    receipt_ref: UUID | None = None
    consumed: bool = False

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("unit")
    @classmethod
    def _default_unit(cls, v: str | None) -> str:
        if v is None or not v.strip():
            return DEFAULT_UNIT
        return v.strip()

    @field_validator("expiry_date", mode="before")
    @classmethod
    def _expiry_as_date(cls, v):
        return _coerce_date(v)


class FoodItemUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    expiry_date: date | None = None
    quantity: float | None = Field(None, gt=0)
    unit: str | None = None
    category: str | None = None
    receipt_ref: UUID | None = None
    consumed: bool | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v

    @field_validator("expiry_date", mode="before")
    @classmethod
    def _expiry_as_date(cls, v):
        return _coerce_date(v)

    @model_validator(mode="after")
    def _required_fields_not_nulled(self):
        for field in ("name", "expiry_date", "quantity", "consumed"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be cleared")
        if self.name is not None and not self.name.strip():
            raise ValueError("name must not be blank")
        if "unit" in self.model_fields_set and not (self.unit or "").strip():
            self.unit = DEFAULT_UNIT
        return self


class FoodItemResponse(BaseModel):
    id: UUID
    owner_id: UUID
    name: str
    quantity: float
    unit: str | None
    category: str | None
    expiry_date: date
    receipt_ref: UUID | None
    consumed: bool
    created_at: datetime

    model_config = {"from_attributes": True, "frozen": True}


class FoodItemView(FoodItemResponse):
    """An item annotated with its urgency at the time of the request."""

    bucket: str
    days_until_expiry: int

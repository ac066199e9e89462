from sqlalchemy import Column, String, Float, Date, Boolean, Uuid

from freshtrack.database import Base, BaseMixin


class FoodItem(BaseMixin, Base):
    __tablename__ = "food_items"

    name = Column(String, nullable=False)
    quantity = Column(Float, nullable=False, default=1.0)
    unit = Column(String)
    category = Column(String, index=True)
    expiry_date = Column(Date, nullable=False, index=True)
    # Weak reference: a receipt id, never a foreign key
    receipt_ref = Column(Uuid(as_uuid=True), index=True)
    consumed = Column(Boolean, nullable=False, default=False)

from datetime import datetime, timezone

from sqlalchemy import Column, String, Float, Date, DateTime

from freshtrack.database import Base, BaseMixin


class Receipt(BaseMixin, Base):
    __tablename__ = "receipts"

    image_url = Column(String, nullable=False)
    store_name = Column(String)
    purchase_date = Column(Date)
    total_amount = Column(Float)
    uploaded_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

from sqlalchemy import Column, String, JSON
from sqlalchemy.dialects.postgresql import JSONB

from freshtrack.database import Base, BaseMixin

JSONType = JSON().with_variant(JSONB(), "postgresql")


class Recipe(BaseMixin, Base):
    __tablename__ = "recipes"

    recipe_name = Column(String, nullable=False)
    ingredients = Column(JSONType, nullable=False, default=list)
    instructions = Column(JSONType, nullable=False, default=list)
    # Snapshot of the item ids the recipe was built from
    source_item_ids = Column(JSONType, nullable=False, default=list)
    image_ref = Column(String)

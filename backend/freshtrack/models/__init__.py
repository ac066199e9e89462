from freshtrack.models.food_item import FoodItem
from freshtrack.models.receipt import Receipt
from freshtrack.models.recipe import Recipe

__all__ = ["FoodItem", "Receipt", "Recipe"]

from typing import Optional
from pydantic import BaseModel
from recipe_remix.schema.meal_schema import Meal


class FavoriteEntry(BaseModel):
    id: str
    name: str
    thumb: Optional[str] = None

    @classmethod
    def from_meal(cls, meal: Meal) -> "FavoriteEntry":
        return cls(id=meal.idMeal, name=meal.strMeal, thumb=meal.strMealThumb)

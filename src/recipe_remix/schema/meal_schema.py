from typing import Iterator, NamedTuple, Optional
from pydantic import BaseModel, ConfigDict

INGREDIENT_SLOTS = 20


class Ingredient(NamedTuple):
    measure: str
    name: str


class Meal(BaseModel):
    # strIngredientN / strMeasureN (N = 1..20) and any other API fields land in model_extra
    model_config = ConfigDict(extra="allow")

    idMeal: str
    strMeal: str
    strMealThumb: Optional[str] = None
    strInstructions: Optional[str] = None
    strCategory: Optional[str] = None
    strArea: Optional[str] = None
    strTags: Optional[str] = None
    strYoutube: Optional[str] = None
    strSource: Optional[str] = None

    def slot(self, kind: str, index: int) -> Optional[str]:
        value = (self.model_extra or {}).get(f"str{kind}{index}")
        return value if isinstance(value, str) else None

    def ingredients(self) -> Iterator[Ingredient]:
        """Yield the filled ingredient slots in order, skipping blank names."""
        for i in range(1, INGREDIENT_SLOTS + 1):
            name = self.slot("Ingredient", i)
            if not name or not name.strip():
                continue
            measure = self.slot("Measure", i) or ""
            yield Ingredient(measure=measure.strip(), name=name.strip())

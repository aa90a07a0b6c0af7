from typing import Literal, Optional
from pydantic import BaseModel
from recipe_remix.schema.meal_schema import Meal


class DisplayState(BaseModel):
    # Persistent across page events
    current_meal: Optional[Meal] = None
    display_html: str = ""
    remix_html: str = ""

    # Per-request, reset by the display agent before each fetch
    action: Literal["random", "search"] = "random"
    query: Optional[str] = None
    meal: Optional[Meal] = None
    error: Optional[str] = None

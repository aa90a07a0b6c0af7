from .meal_schema import Meal, Ingredient, INGREDIENT_SLOTS
from .favorite_schema import FavoriteEntry
from .display_state_schema import DisplayState
from .remix_schema import ChatCompletion, CompletionChoice, CompletionMessage
__all__ = ["Meal", "Ingredient", "INGREDIENT_SLOTS", "FavoriteEntry", "DisplayState", "ChatCompletion", "CompletionChoice", "CompletionMessage"]

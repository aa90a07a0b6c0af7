from .meal_agent import MealAgent
from .favorites_agent import FavoritesStore, FavoritesView
from .remix_agent import RemixAgent
from .display_agent import MealDisplayAgent, remix_current, aremix_current
__all__ = ["MealAgent", "FavoritesStore", "FavoritesView", "RemixAgent", "MealDisplayAgent", "remix_current", "aremix_current"]

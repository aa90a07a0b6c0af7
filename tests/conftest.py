import json

import httpx
import pytest

from recipe_remix.schema import Meal


def make_meal_payload(idx: str = "52772", name: str = "Teriyaki Chicken Casserole", ingredients=None) -> dict:
    """TheMealDB-shaped record; ``ingredients`` is a list of (measure, name) for slots 1..n."""
    if ingredients is None:
        ingredients = [("3/4 cup", "soy sauce"), ("1/2 cup", "water"), ("1/4 cup", "brown sugar")]

    payload = {
        "idMeal": idx,
        "strMeal": name,
        "strCategory": "Chicken",
        "strArea": "Japanese",
        "strInstructions": "Preheat oven to 350F.\r\nCombine sauce.\nBake 30 minutes.",
        "strMealThumb": f"https://www.themealdb.com/images/media/meals/{idx}.jpg",
        "strTags": "Meat,Casserole",
        "strYoutube": "",
        "strSource": None,
    }
    for i in range(1, 21):
        measure, ingredient = ingredients[i - 1] if i <= len(ingredients) else ("", "")
        payload[f"strIngredient{i}"] = ingredient
        payload[f"strMeasure{i}"] = measure
    return payload


@pytest.fixture
def meal_payload() -> dict:
    return make_meal_payload()


@pytest.fixture
def meal(meal_payload) -> Meal:
    return Meal.model_validate(meal_payload)


def json_response(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(data).encode(), headers={"Content-Type": "application/json"})


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

"""HTML snippets for the recipe, favorites and remix regions of the page."""

import re
from html import escape
from typing import List, Optional

from recipe_remix.schema import FavoriteEntry, Meal

_LINE_BREAK = re.compile(r"\r?\n")


def newlines_to_breaks(text: str) -> str:
    return _LINE_BREAK.sub("<br>", text)


def message_html(text: str) -> str:
    return f"<p>{escape(text)}</p>"


def ingredients_html(meal: Meal) -> str:
    items = []
    for ingredient in meal.ingredients():
        prefix = f"{escape(ingredient.measure)} " if ingredient.measure else ""
        items.append(f"<li>{prefix}{escape(ingredient.name)}</li>")
    return "".join(items)


def render_meal(meal: Meal) -> str:
    title = escape(meal.strMeal)
    thumb = escape(meal.strMealThumb or "", quote=True)
    instructions = newlines_to_breaks(escape(meal.strInstructions or ""))
    return (
        '<div class="recipe-title-row">\n'
        f"  <h2>{title}</h2>\n"
        "</div>\n"
        f'<img src="{thumb}" alt="{escape(meal.strMeal, quote=True)}" />\n'
        "<h3>Ingredients:</h3>\n"
        f"<ul>{ingredients_html(meal)}</ul>\n"
        "<h3>Instructions:</h3>\n"
        f"<p>{instructions}</p>"
    )


def remix_html(text: str) -> str:
    return f"<div class='remix-result'>{newlines_to_breaks(escape(text))}</div>"


def render_favorites(entries: List[FavoriteEntry]) -> Optional[str]:
    """Markup for the saved list, or None when the section should be hidden."""
    if not entries:
        return None
    items = []
    for entry in entries:
        thumb = escape(entry.thumb or "", quote=True)
        items.append(
            f'<li><img src="{thumb}" alt="{escape(entry.name, quote=True)}" style="height:40px;vertical-align:middle;">'
            f"<span>{escape(entry.name)}</span></li>"
        )
    return f'<ul id="saved-recipes-list">{"".join(items)}</ul>'

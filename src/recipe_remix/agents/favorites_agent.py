import json
from typing import List, NamedTuple, Optional

from loguru import logger
from pydantic import ValidationError

from recipe_remix.markup import render_favorites
from recipe_remix.schema import FavoriteEntry, Meal
from recipe_remix.storage import JsonFileStore

FAVORITES_KEY = "savedRecipes"


class FavoritesView(NamedTuple):
    visible: bool
    entries: List[FavoriteEntry]
    html: Optional[str]


class FavoritesStore:
    """Ordered favorites list kept under a single key of a key-value store.

    Every write replaces the whole list. There is no dedup and deletion is
    by position in the list the user was looking at.
    """

    def __init__(self, store: JsonFileStore, key: str = FAVORITES_KEY):
        self.store = store
        self.key = key
        self.last_listed: Optional[List[FavoriteEntry]] = None

    def list(self) -> List[FavoriteEntry]:
        raw = self.store.get_item(self.key)
        entries: List[FavoriteEntry] = []

        if raw:
            try:
                decoded = json.loads(raw)
            except ValueError as exc:
                logger.warning(f"Corrupt favorites value under '{self.key}', treating as empty: {exc}")
                decoded = []
            if not isinstance(decoded, list):
                logger.warning(f"Favorites value under '{self.key}' is not a list, treating as empty")
                decoded = []

            for item in decoded:
                try:
                    entries.append(FavoriteEntry.model_validate(item))
                except ValidationError:
                    logger.warning(f"Skipping malformed favorite: {item!r}")

        self.last_listed = list(entries)
        return entries

    def _persist(self, entries: List[FavoriteEntry]) -> None:
        payload = json.dumps([e.model_dump() for e in entries])
        self.store.set_item(self.key, payload)
        self.last_listed = list(entries)

    def add(self, meal: Meal) -> List[FavoriteEntry]:
        entries = self.list()
        entries.append(FavoriteEntry.from_meal(meal))
        self._persist(entries)
        logger.info(f"Saved favorite '{meal.strMeal}' ({len(entries)} total)")
        return entries

    def remove_at(self, index: int, entries: Optional[List[FavoriteEntry]] = None) -> List[FavoriteEntry]:
        if entries is None:
            entries = self.last_listed if self.last_listed is not None else self.list()
        entries = list(entries)

        if not 0 <= index < len(entries):
            logger.warning(f"Ignoring delete of favorite #{index}: list has {len(entries)} entries")
            return entries

        removed = entries.pop(index)
        self._persist(entries)
        logger.info(f"Removed favorite '{removed.name}' at position {index}")
        return entries

    def clear(self) -> None:
        self.store.remove_item(self.key)
        self.last_listed = []

    def render(self) -> FavoritesView:
        entries = self.list()
        return FavoritesView(visible=bool(entries), entries=entries, html=render_favorites(entries))

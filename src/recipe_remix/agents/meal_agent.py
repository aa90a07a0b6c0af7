from typing import Any, Dict, Optional

import httpx
from loguru import logger

from recipe_remix.config import DEFAULT_MEALDB_BASE_URL
from recipe_remix.schema import Meal


class MealAgent:
    """Client for TheMealDB's random and search-by-name endpoints.

    Errors are not handled here: transport and HTTP status failures raise
    ``httpx.HTTPError`` and malformed payloads raise ``ValueError`` (which
    includes ``pydantic.ValidationError``). Callers decide what to show.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_MEALDB_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.random_endpoint = f"{self.base_url}/random.php"
        self.search_endpoint = f"{self.base_url}/search.php"
        self.timeout = timeout if timeout is not None else httpx.Timeout(5.0)
        self.transport = transport
        self.async_transport = async_transport

    @staticmethod
    def _first_meal(data: Any) -> Optional[Meal]:
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected response payload: {type(data).__name__}")
        meals = data.get("meals")
        if not meals:
            return None
        if not isinstance(meals, list):
            raise ValueError("'meals' is not a list")
        return Meal.model_validate(meals[0])

    def _get(self, url: str, params: Optional[Dict[str, str]] = None) -> Optional[Meal]:
        logger.debug(f"GET {url} params={params}")
        with httpx.Client(transport=self.transport, timeout=self.timeout) as client:
            response = client.get(url, params=params)
        response.raise_for_status()
        return self._first_meal(response.json())

    async def _aget(self, url: str, params: Optional[Dict[str, str]] = None) -> Optional[Meal]:
        logger.debug(f"GET {url} params={params}")
        async with httpx.AsyncClient(transport=self.async_transport, timeout=self.timeout) as client:
            response = await client.get(url, params=params)
        response.raise_for_status()
        return self._first_meal(response.json())

    def fetch_random(self) -> Optional[Meal]:
        return self._get(self.random_endpoint)

    def search_by_name(self, name: str) -> Optional[Meal]:
        # httpx URL-escapes query params
        return self._get(self.search_endpoint, params={"s": name})

    async def afetch_random(self) -> Optional[Meal]:
        return await self._aget(self.random_endpoint)

    async def asearch_by_name(self, name: str) -> Optional[Meal]:
        return await self._aget(self.search_endpoint, params={"s": name})

"""Fetch -> render flow for the recipe region, as a small LangGraph.

The graph is the single recoverable boundary for recipe fetches: anything
the MealAgent raises turns into one of the fixed messages below and the
current meal is left as it was. Overlapping calls are not cancelled; the
state returned last is the one the page shows.
"""

import httpx
from langchain_core.runnables import RunnableLambda
from langgraph.graph import END, START, StateGraph
from loguru import logger

from recipe_remix.agents.meal_agent import MealAgent
from recipe_remix.agents.remix_agent import RemixAgent
from recipe_remix.markup import message_html, render_meal
from recipe_remix.schema import DisplayState

LOADING_MESSAGE = "Loading..."
LOADING_RECIPE_MESSAGE = "Loading recipe..."
RANDOM_FAILURE_MESSAGE = "Sorry, couldn't load a recipe."
NOT_FOUND_MESSAGE = "Recipe not found."
SEARCH_FAILURE_MESSAGE = "Sorry, couldn't load the recipe."
NOTHING_TO_REMIX_MESSAGE = "No recipe to remix yet!"

_FETCH_ERRORS = (httpx.HTTPError, ValueError)


class MealDisplayAgent:
    def __init__(self, meal_agent: MealAgent):
        self.meal_agent = meal_agent
        self.graph = self._build_graph()

    # --- nodes -------------------------------------------------------------

    def _fetch_random(self, state: DisplayState) -> dict:
        try:
            meal = self.meal_agent.fetch_random()
        except _FETCH_ERRORS as exc:
            logger.warning(f"Random recipe fetch failed: {exc}")
            return {"meal": None, "error": RANDOM_FAILURE_MESSAGE}
        return self._random_result(meal)

    async def _afetch_random(self, state: DisplayState) -> dict:
        try:
            meal = await self.meal_agent.afetch_random()
        except _FETCH_ERRORS as exc:
            logger.warning(f"Random recipe fetch failed: {exc}")
            return {"meal": None, "error": RANDOM_FAILURE_MESSAGE}
        return self._random_result(meal)

    @staticmethod
    def _random_result(meal) -> dict:
        if meal is None:
            logger.warning("Random recipe endpoint returned no meals")
            return {"meal": None, "error": RANDOM_FAILURE_MESSAGE}
        return {"meal": meal, "error": None}

    def _fetch_by_name(self, state: DisplayState) -> dict:
        try:
            meal = self.meal_agent.search_by_name(state.query or "")
        except _FETCH_ERRORS as exc:
            logger.warning(f"Recipe search for '{state.query}' failed: {exc}")
            return {"meal": None, "error": SEARCH_FAILURE_MESSAGE}
        return self._search_result(meal)

    async def _afetch_by_name(self, state: DisplayState) -> dict:
        try:
            meal = await self.meal_agent.asearch_by_name(state.query or "")
        except _FETCH_ERRORS as exc:
            logger.warning(f"Recipe search for '{state.query}' failed: {exc}")
            return {"meal": None, "error": SEARCH_FAILURE_MESSAGE}
        return self._search_result(meal)

    @staticmethod
    def _search_result(meal) -> dict:
        if meal is None:
            return {"meal": None, "error": NOT_FOUND_MESSAGE}
        return {"meal": meal, "error": None}

    @staticmethod
    def _render(state: DisplayState) -> dict:
        return {"display_html": render_meal(state.meal), "current_meal": state.meal}

    @staticmethod
    def _message(state: DisplayState) -> dict:
        return {"display_html": message_html(state.error or RANDOM_FAILURE_MESSAGE)}

    # --- graph -------------------------------------------------------------

    def _build_graph(self):
        graph = StateGraph(DisplayState)
        graph.add_node("fetch_random", RunnableLambda(self._fetch_random, afunc=self._afetch_random))
        graph.add_node("fetch_by_name", RunnableLambda(self._fetch_by_name, afunc=self._afetch_by_name))
        graph.add_node("render", self._render)
        graph.add_node("message", self._message)

        graph.add_conditional_edges(
            START,
            lambda state: "fetch_by_name" if state.action == "search" else "fetch_random",
            {"fetch_random": "fetch_random", "fetch_by_name": "fetch_by_name"},
        )
        for fetch_node in ("fetch_random", "fetch_by_name"):
            graph.add_conditional_edges(
                fetch_node,
                lambda state: "render" if state.meal is not None else "message",
                {"render": "render", "message": "message"},
            )
        graph.add_edge("render", END)
        graph.add_edge("message", END)
        return graph.compile()

    # --- public API ----------------------------------------------------------

    @staticmethod
    def _request(state: DisplayState, action: str, query=None) -> dict:
        request = state.model_copy(update={"action": action, "query": query, "meal": None, "error": None})
        return dict(request)

    def fetch_random(self, state: DisplayState) -> DisplayState:
        return DisplayState(**self.graph.invoke(self._request(state, "random")))

    def fetch_by_name(self, state: DisplayState, name: str) -> DisplayState:
        return DisplayState(**self.graph.invoke(self._request(state, "search", name)))

    async def afetch_random(self, state: DisplayState) -> DisplayState:
        return DisplayState(**await self.graph.ainvoke(self._request(state, "random")))

    async def afetch_by_name(self, state: DisplayState, name: str) -> DisplayState:
        return DisplayState(**await self.graph.ainvoke(self._request(state, "search", name)))


def remix_current(state: DisplayState, theme: str, agent: RemixAgent) -> DisplayState:
    if state.current_meal is None:
        return state.model_copy(update={"remix_html": message_html(NOTHING_TO_REMIX_MESSAGE)})
    return state.model_copy(update={"remix_html": agent.invoke(state.current_meal, theme)})


async def aremix_current(state: DisplayState, theme: str, agent: RemixAgent) -> DisplayState:
    if state.current_meal is None:
        return state.model_copy(update={"remix_html": message_html(NOTHING_TO_REMIX_MESSAGE)})
    return state.model_copy(update={"remix_html": await agent.ainvoke(state.current_meal, theme)})

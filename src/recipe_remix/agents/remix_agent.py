import random
from typing import Dict, List, Optional

import httpx
from langchain_core.prompts import ChatPromptTemplate
from loguru import logger

from recipe_remix.config import DEFAULT_OPENAI_BASE_URL, DEFAULT_REMIX_MAX_TOKENS, DEFAULT_REMIX_MODEL
from recipe_remix.markup import message_html, remix_html
from recipe_remix.schema import ChatCompletion, Meal

SYSTEM_INSTRUCTION = "You are a creative chef remixing recipes for beginners. Keep it short, fun, and easy to follow."

LOADING_MESSAGES = (
    "Mixing up your culinary magic...",
    "The chef is putting on their creative hat!",
    "Whisking up a tasty twist...",
    "Remixing your recipe for a delicious surprise!",
    "Hang tight! The AI chef is cooking up something fun...",
)

REMIX_THEMES = (
    "Make it vegan",
    "Make it spicy",
    "Make it kid-friendly",
    "Make it a 15-minute meal",
    "Give it a Mexican twist",
    "Turn it into a dessert",
)

NO_TEXT_MESSAGE = "Sorry, couldn't remix the recipe."
FAILURE_MESSAGE = "Sorry, something went wrong remixing your recipe."
NO_API_KEY_MESSAGE = "Remix is unavailable: set OPENAI_API_KEY."

# Role names used by langchain messages -> chat completion roles
_ROLES = {"system": "system", "human": "user", "ai": "assistant"}


class RemixAgent:
    def __init__(
        self,
        api_key: Optional[str],
        model_name: str = DEFAULT_REMIX_MODEL,
        max_tokens: int = DEFAULT_REMIX_MAX_TOKENS,
        base_url: str = DEFAULT_OPENAI_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None,
    ):
        self.api_key = api_key
        self.model_name = model_name
        self.max_tokens = max_tokens
        self.endpoint = f"{base_url.rstrip('/')}/chat/completions"
        self.timeout = timeout if timeout is not None else httpx.Timeout(5.0)
        self.transport = transport
        self.async_transport = async_transport
        self.rng = rng or random.Random()

        self.prompt = ChatPromptTemplate.from_messages([
            ("system", SYSTEM_INSTRUCTION),
            ("human",
             "Remix this recipe in a short, fun, creative, and doable way. "
             "Highlight any changed ingredients or instructions.\n\n"
             "Remix theme: {theme}\n\n"
             "Recipe JSON:\n{recipe_json}"),
        ])

    def loading_message(self) -> str:
        return self.rng.choice(LOADING_MESSAGES)

    def build_messages(self, meal: Meal, theme: str) -> List[Dict[str, str]]:
        messages = self.prompt.format_messages(
            theme=theme,
            recipe_json=meal.model_dump_json(indent=2),
        )
        return [{"role": _ROLES[m.type], "content": m.content} for m in messages]

    def build_request(self, meal: Meal, theme: str) -> Dict:
        return {
            "model": self.model_name,
            "messages": self.build_messages(meal, theme),
            "max_tokens": self.max_tokens,
        }

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    @staticmethod
    def _to_html(payload) -> str:
        completion = ChatCompletion.model_validate(payload)
        text = completion.first_text()
        if text is None:
            logger.warning("Completion response carried no text")
            text = NO_TEXT_MESSAGE
        return remix_html(text)

    def invoke(self, meal: Meal, theme: str) -> str:
        """Remix ``meal`` for ``theme`` and return markup. Never raises."""
        if not self.api_key:
            logger.warning("Remix requested without OPENAI_API_KEY")
            return message_html(NO_API_KEY_MESSAGE)

        logger.debug(f"Remixing '{meal.strMeal}' with theme '{theme}'")
        try:
            with httpx.Client(transport=self.transport, timeout=self.timeout) as client:
                response = client.post(self.endpoint, json=self.build_request(meal, theme), headers=self._headers())
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"Remix request failed: {exc}")
            return message_html(FAILURE_MESSAGE)

        try:
            return self._to_html(payload)
        except ValueError as exc:
            logger.warning(f"Malformed completion response: {exc}")
            return remix_html(NO_TEXT_MESSAGE)

    async def ainvoke(self, meal: Meal, theme: str) -> str:
        if not self.api_key:
            logger.warning("Remix requested without OPENAI_API_KEY")
            return message_html(NO_API_KEY_MESSAGE)

        logger.debug(f"Remixing '{meal.strMeal}' with theme '{theme}'")
        try:
            async with httpx.AsyncClient(transport=self.async_transport, timeout=self.timeout) as client:
                response = await client.post(self.endpoint, json=self.build_request(meal, theme), headers=self._headers())
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"Remix request failed: {exc}")
            return message_html(FAILURE_MESSAGE)

        try:
            return self._to_html(payload)
        except ValueError as exc:
            logger.warning(f"Malformed completion response: {exc}")
            return remix_html(NO_TEXT_MESSAGE)

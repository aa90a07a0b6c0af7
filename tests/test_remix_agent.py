import asyncio
import json
import random

import httpx
import pytest

from recipe_remix.agents import RemixAgent
from recipe_remix.agents.remix_agent import (
    FAILURE_MESSAGE,
    LOADING_MESSAGES,
    NO_API_KEY_MESSAGE,
    NO_TEXT_MESSAGE,
    SYSTEM_INSTRUCTION,
)
from recipe_remix.markup import message_html, remix_html

from conftest import RecordingTransport, json_response

COMPLETION = {"choices": [{"message": {"role": "assistant", "content": "Vegan teriyaki!\nSwap chicken for tofu."}}]}


def _agent(handler, **kwargs) -> RemixAgent:
    transport = RecordingTransport(handler)
    agent = RemixAgent(
        api_key="sk-test",
        base_url="https://llm.test/v1",
        transport=transport,
        async_transport=transport,
        **kwargs,
    )
    agent.recorded = transport
    return agent


def test_request_shape(meal):
    agent = _agent(lambda request: json_response(COMPLETION))

    agent.invoke(meal, "Make it vegan")

    request = agent.recorded.requests[0]
    body = json.loads(request.content)
    assert request.method == "POST"
    assert str(request.url) == "https://llm.test/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert body["model"] == "gpt-4.1"
    assert body["max_tokens"] == 400
    assert body["messages"][0] == {"role": "system", "content": SYSTEM_INSTRUCTION}
    assert body["messages"][1]["role"] == "user"


def test_prompt_embeds_theme_and_full_recipe(meal):
    agent = RemixAgent(api_key="sk-test")

    user = agent.build_messages(meal, "Give it a Mexican twist")[1]["content"]

    assert "Remix theme: Give it a Mexican twist" in user
    recipe_json = user.split("Recipe JSON:\n", 1)[1]
    assert json.loads(recipe_json) == meal.model_dump()
    # extra API fields travel with the recipe
    assert json.loads(recipe_json)["strIngredient1"] == "soy sauce"


def test_success_renders_text_with_breaks(meal):
    agent = _agent(lambda request: json_response(COMPLETION))

    assert agent.invoke(meal, "Make it vegan") == remix_html("Vegan teriyaki!\nSwap chicken for tofu.")
    assert "<br>" in agent.invoke(meal, "Make it vegan")


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"choices": []},
        {"choices": None},
        {"choices": [{}]},
        {"choices": [{"message": {"content": ""}}]},
        {"error": {"message": "invalid api key"}},
        ["not", "an", "object"],
    ],
)
def test_missing_completion_text_falls_back(meal, body):
    agent = _agent(lambda request: json_response(body, status_code=200))

    assert agent.invoke(meal, "Make it spicy") == remix_html(NO_TEXT_MESSAGE)


def test_error_status_without_choices_falls_back(meal):
    agent = _agent(lambda request: json_response({"error": {"message": "rate limited"}}, status_code=429))

    assert agent.invoke(meal, "Make it spicy") == remix_html(NO_TEXT_MESSAGE)


def test_network_failure_returns_fixed_message(meal):
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    assert _agent(handler).invoke(meal, "Make it spicy") == message_html(FAILURE_MESSAGE)


def test_non_json_reply_returns_fixed_message(meal):
    agent = _agent(lambda request: httpx.Response(502, text="<html>bad gateway</html>"))

    assert agent.invoke(meal, "Make it spicy") == message_html(FAILURE_MESSAGE)


def test_without_api_key_no_request(meal):
    def handler(request):
        raise AssertionError("should not be called")

    agent = RemixAgent(api_key=None, transport=httpx.MockTransport(handler))

    assert agent.invoke(meal, "Make it vegan") == message_html(NO_API_KEY_MESSAGE)


def test_async_invoke(meal):
    agent = _agent(lambda request: json_response(COMPLETION))

    html = asyncio.run(agent.ainvoke(meal, "Make it vegan"))

    assert html == remix_html("Vegan teriyaki!\nSwap chicken for tofu.")


def test_async_invoke_fallback(meal):
    agent = _agent(lambda request: json_response({}))

    assert asyncio.run(agent.ainvoke(meal, "Make it vegan")) == remix_html(NO_TEXT_MESSAGE)


def test_custom_model_and_token_cap(meal):
    agent = _agent(lambda request: json_response(COMPLETION), model_name="gpt-4o-mini", max_tokens=120)

    agent.invoke(meal, "Make it vegan")

    body = json.loads(agent.recorded.requests[0].content)
    assert body["model"] == "gpt-4o-mini"
    assert body["max_tokens"] == 120


def test_loading_message_is_one_of_the_fixed_set():
    agent = RemixAgent(api_key=None, rng=random.Random(3))

    seen = {agent.loading_message() for _ in range(50)}

    assert seen <= set(LOADING_MESSAGES)
    assert len(seen) > 1

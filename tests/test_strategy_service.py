import httpx
import pytest
from openai import APIConnectionError
from pydantic import ValidationError

from app.errors import GenerationError
from app.models import StrategyContent, StrategyRequest
from app.services.strategy_service import StrategyService


REQUEST = StrategyRequest.model_validate(
    {
        "businessDetails": "Handmade eco-friendly soaps sold online.",
        "targetAudience": "Eco-conscious millennials aged 25-40.",
        "goals": "Grow online sales by 20%.",
        "platforms": ["x", "instagram"],
    }
)


class DummyLLM:
    def __init__(self, result) -> None:
        self._result = result
        self.requests: list[StrategyRequest] = []

    def generate_strategies(self, request: StrategyRequest):
        self.requests.append(request)
        if isinstance(self._result, Exception):
            raise self._result
        return self._result


def test_create_strategy_returns_llm_result() -> None:
    content = StrategyContent.model_validate(
        {
            "strategies": [
                {
                    "platform": "x",
                    "strategy": "s",
                    "weeklyContentPlan": "w",
                    "algorithmKnowledge": "a",
                }
            ]
        }
    )
    llm = DummyLLM(content)

    result = StrategyService(llm=llm).create_strategy(REQUEST)

    assert result is content
    assert llm.requests == [REQUEST]


@pytest.mark.parametrize("reply", [None, StrategyContent()])
def test_missing_strategies_raise_generation_error(reply) -> None:
    with pytest.raises(GenerationError):
        StrategyService(llm=DummyLLM(reply)).create_strategy(REQUEST)


def test_malformed_reply_raises_generation_error() -> None:
    with pytest.raises(ValidationError) as exc_info:
        StrategyContent.model_validate_json('{"strategies": [{"platform": "myspace"}]}')

    with pytest.raises(GenerationError):
        StrategyService(llm=DummyLLM(exc_info.value)).create_strategy(REQUEST)


def test_record_sections_follow_fixed_order() -> None:
    content = StrategyContent.model_validate(
        {
            "strategies": [
                {
                    "platform": "facebook",
                    "strategy": "s",
                    "weeklyContentPlan": "w",
                    "algorithmKnowledge": "a",
                }
            ]
        }
    )

    (record,) = content.to_records()

    assert record.identifier == "facebook"
    assert [(s.title, s.body) for s in record.sections] == [
        ("Strategy", "s"),
        ("Weekly Content Plan", "w"),
        ("Algorithm Knowledge", "a"),
    ]


def test_openai_failure_raises_generation_error() -> None:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    llm = DummyLLM(APIConnectionError(request=request))

    with pytest.raises(GenerationError):
        StrategyService(llm=llm).create_strategy(REQUEST)

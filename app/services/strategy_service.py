from typing import Optional

from openai import OpenAIError
from pydantic import ValidationError

from app.errors import GenerationError
from app.infra.llm_client import LLMClient
from app.logging_config import get_logger
from app.models import StrategyContent, StrategyRequest


logger = get_logger(__name__)


class StrategyService:
    """입력 폼 → LLM → 플랫폼별 전략 결과."""

    def __init__(self, llm: Optional[LLMClient] = None) -> None:
        self._llm = llm or LLMClient()

    def create_strategy(self, request: StrategyRequest) -> StrategyContent:
        try:
            result = self._llm.generate_strategies(request)
        except ValidationError as e:
            raise GenerationError("AI returned a malformed strategy.") from e
        except OpenAIError as e:
            # 연결 실패, 인증, rate limit, timeout 모두 같은 실패로 알린다.
            raise GenerationError("AI failed to return a valid strategy.") from e

        if not result or not result.strategies:
            raise GenerationError("AI failed to return a valid strategy.")

        logger.info(
            "generated strategies for %s",
            ", ".join(s.platform for s in result.strategies),
        )
        return result

from openai import OpenAI

from app.config import settings
from app.models import StrategyContent, StrategyRequest


SYSTEM_PROMPT = (
    "You are an expert social media strategist. "
    "Given the business details, target audience, and goals, generate tailored "
    "social media strategies for each of the selected platforms.\n\n"
    "For each platform, you must provide:\n"
    "1. strategy: A detailed strategy with actionable steps and suggestions.\n"
    "2. weeklyContentPlan: A sample 7-day content plan (Monday to Sunday) with "
    "specific, creative ideas for posts.\n"
    "3. algorithmKnowledge: Key insights into how the platform's algorithm works "
    "and how this strategy leverages it.\n\n"
    'Respond with JSON only: {"strategies": [{"platform": ..., "strategy": ..., '
    '"weeklyContentPlan": ..., "algorithmKnowledge": ...}]}. '
    'Use the platform codes exactly as given ("instagram", "x", "facebook", "linkedin").'
)


class LLMClient:
    """전략 생성 LLM 클라이언트.

    환경 변수 OPENAI_API_KEY 를 사용해 인증한다.
    """

    def __init__(self) -> None:
        self._client = OpenAI()

    def generate_strategies(self, request: StrategyRequest) -> StrategyContent:
        user_prompt = (
            f"Business Details: {request.business_details}\n"
            f"Target Audience: {request.target_audience}\n"
            f"Goals: {request.goals}\n"
            f"Platforms: {', '.join(request.platforms)}"
        )

        resp = self._client.chat.completions.create(
            model=settings.llm_model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
            response_format={"type": "json_object"},
            temperature=0.7,
        )

        content = resp.choices[0].message.content
        return StrategyContent.model_validate_json(content or "{}")

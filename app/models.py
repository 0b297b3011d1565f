from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from app.layout.document import Record, Section


Platform = Literal["instagram", "x", "facebook", "linkedin"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class StrategyRequest(_CamelModel):
    business_details: str = Field(alias="businessDetails", min_length=20)
    target_audience: str = Field(alias="targetAudience", min_length=20)
    goals: str = Field(min_length=10)
    platforms: List[Platform] = Field(min_length=1)


class PlatformStrategy(_CamelModel):
    platform: Platform
    strategy: str
    weekly_content_plan: str = Field(alias="weeklyContentPlan")
    algorithm_knowledge: str = Field(alias="algorithmKnowledge")

    def to_record(self) -> Record:
        # Section 순서는 고정이다.
        return Record(
            identifier=self.platform,
            sections=(
                Section("Strategy", self.strategy),
                Section("Weekly Content Plan", self.weekly_content_plan),
                Section("Algorithm Knowledge", self.algorithm_knowledge),
            ),
        )


class StrategyContent(_CamelModel):
    strategies: List[PlatformStrategy] = Field(default_factory=list)

    def to_records(self) -> List[Record]:
        """선택된 순서 그대로 Record 목록으로 바꾼다."""

        return [s.to_record() for s in self.strategies]

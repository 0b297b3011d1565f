from dataclasses import dataclass
from enum import Enum

from app.errors import LayoutError


# 부동소수 누적 오차 허용치 (pt)
EPSILON = 1e-6


class CursorState(str, Enum):
    ON_PAGE = "on_page"
    NEEDS_BREAK = "needs_break"


@dataclass(frozen=True)
class Reservation:
    fits: bool
    remaining: float
    # fits 일 때 예약이 시작되는 y 오프셋, 아니면 현재 커서 위치
    offset: float


class PageCursor:
    """현재 페이지의 세로 위치를 추적하는 작은 상태 머신.

    - ON_PAGE: reserve() 가 가능하다.
    - NEEDS_BREAK: 직전 reserve() 가 실패했다. advance_page() 전까지 reserve() 불가.
    """

    def __init__(self, usable_height: float) -> None:
        if usable_height <= 0:
            raise LayoutError(f"Usable page height must be positive, got {usable_height}")
        self.usable_height = usable_height
        self.page_count = 1
        self.state = CursorState.ON_PAGE
        self._used = 0.0

    @property
    def used(self) -> float:
        return self._used

    @property
    def remaining(self) -> float:
        return self.usable_height - self._used

    @property
    def at_top(self) -> bool:
        return self._used <= EPSILON

    def reserve(self, height: float) -> Reservation:
        if self.state is CursorState.NEEDS_BREAK:
            raise LayoutError("Page break pending; call advance_page() before reserving")

        if height <= self.remaining + EPSILON:
            offset = self._used
            self._used = min(self._used + height, self.usable_height)
            return Reservation(fits=True, remaining=self.remaining, offset=offset)

        self.state = CursorState.NEEDS_BREAK
        return Reservation(fits=False, remaining=self.remaining, offset=self._used)

    def skip(self, height: float) -> float:
        """간격을 소비한다. 남은 공간보다 크면 남은 만큼만 쓰고, 페이지를 넘기지 않는다."""

        if self.state is CursorState.NEEDS_BREAK:
            raise LayoutError("Page break pending; call advance_page() before skipping")
        consumed = max(0.0, min(height, self.remaining))
        self._used += consumed
        return consumed

    def advance_page(self) -> None:
        self._used = 0.0
        self.page_count += 1
        self.state = CursorState.ON_PAGE

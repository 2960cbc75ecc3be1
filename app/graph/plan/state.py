"""일정 생성 그래프 상태 정의."""

from datetime import date
from typing import TypedDict


class PlanState(TypedDict, total=False):
    """일정 생성 그래프 상태.

    Keys:
        message: 사용자 자유 입력
        today: 계절 판단 기준일 (없으면 실행 시점)
        trip_info: 추출된 여행 정보
        region: 정규화된 지역명
        trip_days: 여행 일수
        season: 적용된 계절
        slots: 생성된 일정 슬롯 목록
        error: 오류 메시지
    """

    message: str
    today: date | None
    trip_info: dict
    region: str
    trip_days: int
    season: str
    slots: list[dict]
    error: str | None

"""지도 좌표(네이버 Local mapx/mapy) 계산 유틸리티.

네이버 Local 검색 좌표는 단위가 일정하지 않은 정수 문자열이므로
모든 거리 계산은 상대 비교용 유클리드 거리로만 사용합니다.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable


def parse_coordinate(value: object) -> float:
    """좌표 문자열을 숫자로 변환합니다. 유한한 숫자가 아니면 0을 반환합니다."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return 0.0
    return numeric if math.isfinite(numeric) else 0.0


@dataclass(frozen=True, slots=True)
class MapPoint:
    """지도 평면 위의 한 점."""

    x: float
    y: float

    @classmethod
    def from_raw(cls, x: object, y: object) -> MapPoint:
        return cls(x=parse_coordinate(x), y=parse_coordinate(y))

    def squared_distance_to(self, other: MapPoint) -> float:
        """정렬용 제곱 거리."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance_to(self, other: MapPoint) -> float:
        return math.sqrt(self.squared_distance_to(other))


def centroid(points: Iterable[MapPoint]) -> MapPoint | None:
    """점 집합의 평균 좌표를 반환합니다. 점이 없으면 None."""
    items = list(points)
    if not items:
        return None
    return MapPoint(
        x=sum(point.x for point in items) / len(items),
        y=sum(point.y for point in items) / len(items),
    )

"""장소 검색 공급자 인터페이스."""

from abc import ABC, abstractmethod

from app.schemas.place import PlaceCandidate


class PlacesServiceProtocol(ABC):
    """키워드 검색으로 PlaceCandidate 목록을 돌려주는 공급자.

    구현체는 네트워크/HTTP 오류를 예외로 올리지 않고 빈 목록으로 처리합니다.
    """

    @abstractmethod
    async def search(self, query: str, display: int | None = None) -> list[PlaceCandidate]:
        """키워드로 장소를 검색합니다.

        Args:
            query: 자유 형식 검색어 (예: "경주 국밥 점심 맛집")
            display: 요청 건수. None이면 구현체 기본값

        Returns:
            공급자 응답 순서를 유지한 장소 후보 목록
        """
        raise NotImplementedError

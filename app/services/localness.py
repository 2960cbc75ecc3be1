"""지역 특색(로컬) 점수 계산."""

from __future__ import annotations

from app.services.brand_blacklist import franchise_score, is_franchise

LOCAL_KEYWORDS: tuple[str, ...] = (
    "시장",
    "전통",
    "노포",
    "토박이",
    "로컬",
    "향토",
    "가맥",
    "골목",
    "분식집",
    "식당",
    "포장마차",
    "재래시장",
    "국밥",
    "순대국",
    "칼국수",
    "비빔밥",
    "막국수",
    "회센터",
    "횟집",
    "정식",
    "한정식",
    "오미자",
    "황태",
    "메밀",
    "속초",
    "강릉",
    "경주",
    "전주",
    "여수",
    "통영",
    "부산",
    "춘천",
    "제주",
    "인천",
    "광주",
    "대구",
    "대전",
    "청주",
    "안동",
    "공주",
    "포항",
    "군산",
)

LOCAL_KEYWORD_SCORE = 2
REGION_MATCH_SCORE = 3
FRANCHISE_PENALTY = -5
INDEPENDENT_BONUS = 1
INDEPENDENT_MAX_FRANCHISE_SCORE = 1


def localness_score(place_name: str, region_name: str | None = None) -> int:
    """상호명의 지역 특색 점수를 계산합니다.

    지역/전통 키워드마다 +2, 검색 지역명 포함 시 +3을 더하고,
    프랜차이즈로 판별되면 -5, 프랜차이즈 점수가 1 이하이면 +1을 더합니다.
    """
    name = (place_name or "").lower()
    score = sum(LOCAL_KEYWORD_SCORE for keyword in LOCAL_KEYWORDS if keyword in name)

    region = (region_name or "").strip().lower()
    if region and region in name:
        score += REGION_MATCH_SCORE

    if is_franchise(place_name or ""):
        score += FRANCHISE_PENALTY
    elif franchise_score(place_name or "") <= INDEPENDENT_MAX_FRANCHISE_SCORE:
        score += INDEPENDENT_BONUS

    return score

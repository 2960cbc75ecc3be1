"""프랜차이즈 상호 판별 휴리스틱.

점수가 높을수록 체인점일 가능성이 높습니다. 현지 가게를 우선 추천하기 위해
장소 랭킹의 블랙리스트 단계와 로컬 점수 계산에서 함께 사용합니다.
"""

from __future__ import annotations

import re

FRANCHISE_KEYWORDS: tuple[str, ...] = (
    # 카페/디저트
    "스타벅스",
    "starbucks",
    "이디야",
    "ediya",
    "투썸",
    "twosome",
    "파스쿠찌",
    "빽다방",
    "paik",
    "던킨",
    "dunkin",
    "배스킨라빈스",
    "베스킨라빈스",
    "baskin",
    "파리바게뜨",
    "paris baguette",
    "뚜레쥬르",
    "tlj",
    "설빙",
    "공차",
    "gongcha",
    "탐앤탐스",
    "toms",
    "할리스",
    "hollys",
    "엔제리너스",
    "엔젤리너스",
    "angel-in-us",
    # 버거/치킨/피자
    "맥도날드",
    "mcdonald",
    "버거킹",
    "lotteria",
    "롯데리아",
    "kfc",
    "써브웨이",
    "서브웨이",
    "subway",
    "맘스터치",
    "mom's touch",
    "쉐이크쉑",
    "shake shack",
    "교촌",
    "bhc",
    "네네치킨",
    "굽네",
    "처갓집",
    "푸라닭",
    "호식이두마리",
    "도미노",
    "domino",
    "피자헛",
    "pizza hut",
    "파파존스",
    "papa john",
    # 한식/기타
    "본죽",
    "본도시락",
    "한솥",
    "신전",
    "죠스떡볶이",
    "죠스",
    "역전할머니맥주",
    "경성주막",
    "두찜",
    "육수당",
)

FRANCHISE_KEYWORD_SCORE = 3
BRANCH_PATTERN_SCORE = 2
GENERIC_CHAIN_SCORE = 1
BRAND_CAPS_SCORE = 1
DEFAULT_FRANCHISE_THRESHOLD = 3

_NON_WORD_PATTERN = re.compile(r"[\W_]+")

_BRANCH_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"[가-힣a-z0-9]{1,10}점$", re.IGNORECASE),
    re.compile(r"[0-9]+호점$", re.IGNORECASE),
    re.compile(r"(역|터미널|센터|몰|타워)[가-힣]*점$", re.IGNORECASE),
    re.compile(r"[가-힣a-z0-9]{1,10}(본점|본사)", re.IGNORECASE),
)
_GENERIC_CHAIN_PATTERN = re.compile(r"치킨|피자|버거|도시락|분식|카페|커피", re.IGNORECASE)
_BRANCH_SUFFIX_PATTERN = re.compile(r"점$|호점$", re.IGNORECASE)
_CAPS_RUN_PATTERN = re.compile(r"[A-Z]{2,}")


def normalize_name(text: str) -> str:
    """소문자로 바꾸고 공백과 문장부호를 제거합니다."""
    return _NON_WORD_PATTERN.sub("", (text or "").lower())


_NORMALIZED_KEYWORDS: tuple[str, ...] = tuple(
    dict.fromkeys(keyword for keyword in (normalize_name(item) for item in FRANCHISE_KEYWORDS) if keyword)
)


def matches_franchise_keyword(place_name: str) -> bool:
    """정규화된 상호명에 프랜차이즈 키워드가 포함되어 있는지 반환합니다."""
    normalized = normalize_name(place_name)
    if not normalized:
        return False
    return any(keyword in normalized for keyword in _NORMALIZED_KEYWORDS)


def franchise_score(place_name: str) -> int:
    """상호명의 프랜차이즈 점수를 계산합니다.

    - 키워드 일치: +3
    - 지점/호점/역점 형태: +2
    - 일반 업종 + 지점 조합 (예: ○○치킨 강남점): +1
    - 연속 대문자 단어 2개 이상: +1
    """
    raw = (place_name or "").strip()
    score = 0

    if matches_franchise_keyword(raw):
        score += FRANCHISE_KEYWORD_SCORE

    if any(pattern.search(raw) for pattern in _BRANCH_PATTERNS):
        score += BRANCH_PATTERN_SCORE

    if _GENERIC_CHAIN_PATTERN.search(raw) and _BRANCH_SUFFIX_PATTERN.search(raw):
        score += GENERIC_CHAIN_SCORE

    if len(_CAPS_RUN_PATTERN.findall(raw)) >= 2:
        score += BRAND_CAPS_SCORE

    return score


def is_franchise(place_name: str, threshold: int = DEFAULT_FRANCHISE_THRESHOLD) -> bool:
    """프랜차이즈 점수가 임계값 이상이면 True."""
    return franchise_score(place_name) >= threshold

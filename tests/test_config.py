"""애플리케이션 설정 테스트."""

from app.core.config import Settings


def test_settings_only_declare_used_fields() -> None:
    assert "APP_ENV" not in Settings.model_fields


def test_display_sizes_are_clamped() -> None:
    settings = Settings(NAVER_SEARCH_DISPLAY=0, NAVER_SEARCH_FALLBACK_DISPLAY="500")

    assert settings.NAVER_SEARCH_DISPLAY == 1
    assert settings.NAVER_SEARCH_FALLBACK_DISPLAY == 100


def test_plan_max_days_is_at_least_one() -> None:
    assert Settings(PLAN_MAX_DAYS=0).PLAN_MAX_DAYS == 1
    assert Settings(PLAN_MAX_DAYS="abc").PLAN_MAX_DAYS == 14

"""일정 생성 그래프."""

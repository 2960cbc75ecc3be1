"""설정, 로깅, 공용 유틸리티."""

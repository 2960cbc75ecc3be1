"""요청/응답 및 도메인 스키마."""

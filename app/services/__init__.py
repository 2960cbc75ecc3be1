"""도메인 서비스."""

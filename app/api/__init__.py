"""HTTP API 라우터."""

"""LangGraph 워크플로우."""

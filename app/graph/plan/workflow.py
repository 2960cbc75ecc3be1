"""일정 생성 그래프 워크플로우 구성."""

from langgraph.graph import END, StateGraph

from app.graph.plan.nodes import build_plan_slots, extract_trip_info_node
from app.graph.plan.state import PlanState


def _create_plan_workflow() -> StateGraph:
    """일정 생성 그래프 워크플로우를 생성합니다."""
    workflow = StateGraph(PlanState)

    workflow.add_node("extract_trip_info", extract_trip_info_node)
    workflow.add_node("build_plan_slots", build_plan_slots)

    workflow.set_entry_point("extract_trip_info")
    workflow.add_edge("extract_trip_info", "build_plan_slots")
    workflow.add_edge("build_plan_slots", END)

    return workflow


compiled_plan_graph = _create_plan_workflow().compile()

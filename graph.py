# graph.py

from typing import TypedDict, Annotated, Optional
from langchain_core.language_models import BaseLanguageModel
from langchain_core.messages import BaseMessage
from langgraph.graph import StateGraph, END

from agents.assistant import AssistantAgent
from agents.consult_logger import ConsultLoggerAgent
from core.memory_service import MemoryService
from core.profile_manager import ProfileManager

# --- AGENT STATE ---
class AssistantState(TypedDict):
    messages: Annotated[list[BaseMessage], lambda x, y: x + y]
    user_id: str
    language: Optional[str]
    consultation: Optional[dict]

# --- ROUTING LOGIC ---
def assistant_router(state: AssistantState):
    if state.get("consultation"):
        print("---ASSISTANT ROUTER: Answer produced, routing to consult logger.---")
        return "consult_logger"
    print("---ASSISTANT ROUTER: Nothing to record, ending turn.---")
    return END

def build_assistant_graph(llm: BaseLanguageModel, profile_manager: ProfileManager, memory_service: MemoryService):
    """Wires the assistant and the silent consult logger into a compiled graph."""
    assistant_node = AssistantAgent(llm, memory_service)
    consult_logger_node = ConsultLoggerAgent(profile_manager)

    workflow = StateGraph(AssistantState)
    workflow.add_node("assistant", assistant_node.invoke)
    workflow.add_node("consult_logger", consult_logger_node.invoke)

    workflow.set_entry_point("assistant")
    workflow.add_conditional_edges("assistant", assistant_router, {
        "consult_logger": "consult_logger",
        END: END
    })
    workflow.add_edge("consult_logger", END)

    app = workflow.compile()
    print("---GRAPH COMPILED: ASSISTANT---")
    return app

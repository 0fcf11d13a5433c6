# agents/assistant.py

from langchain_core.language_models import BaseLanguageModel
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.messages import AIMessage

from core.constants import language_name
from core.memory_service import MemoryService

class AssistantAgent:
    """Samarth AI: the conversational farming assistant."""

    def __init__(self, llm: BaseLanguageModel, memory_service: MemoryService):
        self.llm = llm
        self.memory = memory_service
        self.prompt = ChatPromptTemplate.from_template(
            """You are Samarth AI, a friendly farming assistant for Indian farmers.

**Farm Context:**
{farm_context}

**Conversation History:**
{chat_history}

Answer concisely and helpfully in {language}: "{question}"
"""
        )
        self.chain = self.prompt | self.llm

    def invoke(self, state: dict) -> dict:
        print("---ASSISTANT AGENT---")
        user_id = state["user_id"]
        ctx = self.memory.get_context(user_id)

        language = state.get("language") or (ctx["language"] if ctx else "en")
        question = state["messages"][-1].content
        history_str = "\n".join([f"{msg.type.upper()}: {msg.content}" for msg in state["messages"][:-1]]) or "None"

        if ctx:
            farm_context = (
                f"- {ctx['field_size']} acres of {ctx['soil_type']} soil, water from {ctx['water_source']}\n"
                f"- Current crop: {ctx['current_crop']}\n"
                f"- Location: {ctx['location']}, {ctx['current_season']} season\n"
                f"- Recent activity:\n{ctx['history_narrative']}"
            )
        else:
            farm_context = "Unknown farm."

        try:
            response = self.chain.invoke({
                "farm_context": farm_context,
                "chat_history": history_str,
                "language": language_name(language),
                "question": question,
            })
        except Exception as e:
            print(f"---ASSISTANT AGENT: LLM ERROR: {type(e).__name__} - {e}---")
            return {
                "messages": [AIMessage(content="I encountered an error processing your request. Please try again.")],
                "consultation": None,
            }

        return {
            "messages": [AIMessage(content=response.content)],
            "consultation": {"question": question, "answer": response.content},
        }

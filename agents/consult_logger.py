# agents/consult_logger.py

from core.models import HistoryEventType
from core.profile_manager import ProfileManager

class ConsultLoggerAgent:
    """
    Records each answered assistant question on the farmer's timeline.
    It works in the background and does not generate a direct response to the user.
    """
    def __init__(self, profile_manager: ProfileManager):
        self.profile_manager = profile_manager

    def invoke(self, state: dict) -> dict:
        print("---CONSULT LOGGER AGENT---")
        consultation = state.get("consultation")

        if consultation:
            question = consultation["question"]
            title = question if len(question) <= 50 else question[:50] + "..."
            answer = consultation["answer"]
            self.profile_manager.add_history_event(
                state["user_id"],
                HistoryEventType.AI_CONSULT,
                title=f"Asked: {title}",
                details=answer if len(answer) <= 200 else answer[:200] + "...",
                metadata=consultation,
            )

        # Pass the state through without adding messages.
        return {"consultation": None}

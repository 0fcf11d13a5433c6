# main.py

from typing import Optional
from dotenv import load_dotenv
from langchain_core.language_models import BaseLanguageModel
from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI

from agents.crop_predictor import CropPredictorAgent
from agents.encyclopedia import EncyclopediaAgent
from agents.farm_signals import FarmSignalsAgent
from agents.fertilizer_planner import FertilizerPlannerAgent
from agents.intercropping import IntercroppingAgent
from agents.plant_disease import PlantDiseaseAgent
from agents.weather import WeatherAgent
from core.change_notifier import ChangeNotifier
from core.config import settings
from core.memory_service import MemoryService
from core.profile_manager import ProfileManager
from core.storage import KeyValueStorage, create_storage
from graph import build_assistant_graph

class KisanAdvisor:
    """
    Builds every component once per process and hands the same store,
    notifier and memory service to all advisory agents.
    """

    def __init__(self, storage: Optional[KeyValueStorage] = None,
                 llm: Optional[BaseLanguageModel] = None,
                 reasoning_llm: Optional[BaseLanguageModel] = None):
        # --- INITIALIZE CORE COMPONENTS ---
        self.notifier = ChangeNotifier()
        self.profile_manager = ProfileManager(storage or create_storage(), self.notifier)
        self.memory_service = MemoryService(self.profile_manager)

        # OPTIMIZATION: fast model for most calls, stronger model for planning
        self.llm = llm or ChatOpenAI(model=settings.chat_model, api_key=settings.openai_api_key)
        self.reasoning_llm = reasoning_llm or (
            self.llm if llm else ChatOpenAI(model=settings.reasoning_model, api_key=settings.openai_api_key)
        )

        # --- AGENT DEFINITIONS ---
        self.plant_disease = PlantDiseaseAgent(self.llm, self.profile_manager)
        self.crop_predictor = CropPredictorAgent(self.reasoning_llm, self.memory_service)
        self.fertilizer_planner = FertilizerPlannerAgent(self.llm, self.memory_service, self.profile_manager)
        self.intercropping = IntercroppingAgent(self.reasoning_llm, self.memory_service)
        self.weather = WeatherAgent(self.llm, self.memory_service)
        self.farm_signals = FarmSignalsAgent(self.llm, self.memory_service)
        self.encyclopedia = EncyclopediaAgent(self.llm)
        self.assistant = build_assistant_graph(self.llm, self.profile_manager, self.memory_service)

    def ask(self, user_id: str, question: str, history: Optional[list] = None) -> str:
        """Runs one assistant turn and returns the reply text."""
        messages = list(history or []) + [HumanMessage(content=question)]
        profile = self.profile_manager.get_profile(user_id)
        final_state = self.assistant.invoke({
            "user_id": user_id,
            "language": profile.language.value if profile else None,
            "messages": messages,
        })
        return final_state["messages"][-1].content


# Run the application
if __name__ == "__main__":
    from core.onboarding import OnboardingForm, complete_onboarding
    from core.models import Location

    load_dotenv()
    advisor = KisanAdvisor()

    user_id = "my_farm_user"
    if not advisor.profile_manager.profile_exists(user_id):
        complete_onboarding(advisor.profile_manager, user_id, OnboardingForm(
            field_size=2,
            soil_type="Alluvial",
            water_source="Canal",
            current_crop="Rice",
            location=Location(lat=17.3911, lng=78.3203, address="Hyderabad, Telangana"),
        ))

    print("---Starting new query: Fertilizer Plan---")
    plan = advisor.fertilizer_planner.invoke(user_id)
    if plan:
        for stage in plan.stages:
            print(f"- {stage.stage} ({stage.timing}): {stage.npk}, {stage.dosage}")

    print("---Starting new query: Assistant---")
    print(advisor.ask(user_id, "Should I irrigate my rice field this week?"))

    profile = advisor.profile_manager.get_profile(user_id)
    print(f"\nTimeline ({len(profile.history)} events):")
    for event in profile.history:
        print(f"- [{event.timestamp:%Y-%m-%d %H:%M}] {event.type.value}: {event.title}")

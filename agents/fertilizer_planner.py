# agents/fertilizer_planner.py

from typing import Optional

from langchain_core.language_models import BaseLanguageModel
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers.json import JsonOutputParser

from core.advisory_models import FertilizerPlan
from core.memory_service import MemoryService
from core.models import HistoryEventType
from core.profile_manager import ProfileManager

class FertilizerPlannerAgent:
    """Builds a stage-by-stage fertilizer schedule and records it as an NPK update."""

    def __init__(self, llm: BaseLanguageModel, memory_service: MemoryService, profile_manager: ProfileManager):
        self.llm = llm
        self.memory = memory_service
        self.profile_manager = profile_manager
        self.parser = JsonOutputParser(pydantic_object=FertilizerPlan)
        self.prompt = ChatPromptTemplate.from_template(
            """You are a soil fertility expert. Prepare a fertilizer schedule for {crop} grown in {soil_type} soil
on {field_size} acres irrigated by {water_source}.

For every growth stage give the timing, the NPK ratio, the chemical dosage per acre with instructions,
and an organic alternative with its instructions and benefits.
All text must be in {language}.

{format_instructions}
""",
            partial_variables={"format_instructions": self.parser.get_format_instructions()}
        )
        self.chain = self.prompt | self.llm | self.parser

    def invoke(self, user_id: str, crop: Optional[str] = None) -> Optional[FertilizerPlan]:
        print("---FERTILIZER PLANNER AGENT---")
        ctx = self.memory.get_context(user_id)
        if ctx is None:
            print(f"---FERTILIZER PLANNER: No profile for {user_id}---")
            return None

        crop = crop or ctx["current_crop"]
        try:
            response_data = self.chain.invoke({
                "crop": crop,
                "soil_type": ctx["soil_type"],
                "field_size": ctx["field_size"],
                "water_source": ctx["water_source"],
                "language": ctx["language_name"],
            })
            plan = FertilizerPlan.model_validate(response_data)
        except Exception as e:
            print(f"---FERTILIZER PLANNER: LLM ERROR: {type(e).__name__} - {e}---")
            return None

        self.profile_manager.add_history_event(
            user_id,
            HistoryEventType.NPK_UPDATE,
            title=f"Fertilizer Schedule: {plan.crop}",
            details=f"{len(plan.stages)} stages over {plan.total_duration}.",
            metadata=plan.model_dump(mode="json"),
        )
        return plan

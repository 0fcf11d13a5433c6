# agents/farm_signals.py

from typing import List

from langchain_core.language_models import BaseLanguageModel
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers.json import JsonOutputParser

from core.advisory_models import ActionableSignal, ActionableSignals
from core.memory_service import MemoryService

class FarmSignalsAgent:
    """Produces the two most important to-dos shown on the farmer's dashboard."""

    def __init__(self, llm: BaseLanguageModel, memory_service: MemoryService):
        self.llm = llm
        self.memory = memory_service
        self.parser = JsonOutputParser(pydantic_object=ActionableSignals)
        self.prompt = ChatPromptTemplate.from_template(
            """Analyze this farm and provide 2 actionable signals in {language}.

- Soil: {soil_type}, {field_size} acres, water from {water_source}
- Crop: {current_crop}
- Location: {location}
- Season: {season}
- Recent Activity:
{history_narrative}

Keep `priority` as "High", "Medium" or "Low" in English.

{format_instructions}
""",
            partial_variables={"format_instructions": self.parser.get_format_instructions()}
        )
        self.chain = self.prompt | self.llm | self.parser

    def invoke(self, user_id: str) -> List[ActionableSignal]:
        print("---FARM SIGNALS AGENT---")
        ctx = self.memory.get_context(user_id)
        if ctx is None:
            return []

        try:
            response_data = self.chain.invoke({
                "language": ctx["language_name"],
                "soil_type": ctx["soil_type"],
                "field_size": ctx["field_size"],
                "water_source": ctx["water_source"],
                "current_crop": ctx["current_crop"],
                "location": ctx["location"],
                "season": ctx["current_season"],
                "history_narrative": ctx["history_narrative"],
            })
            return ActionableSignals.model_validate(response_data).signals
        except Exception as e:
            print(f"---FARM SIGNALS: LLM ERROR: {type(e).__name__} - {e}---")
            return []

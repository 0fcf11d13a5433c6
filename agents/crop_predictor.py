# agents/crop_predictor.py

from typing import List, Optional

from langchain_core.language_models import BaseLanguageModel
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers.json import JsonOutputParser

from core.advisory_models import CropPredictions, PredictedCrop
from core.memory_service import MemoryService

class CropPredictorAgent:
    """Predicts the three most profitable crops for the farm in a given season."""

    def __init__(self, llm: BaseLanguageModel, memory_service: MemoryService):
        self.llm = llm
        self.memory = memory_service
        self.parser = JsonOutputParser(pydantic_object=CropPredictions)
        self.prompt = ChatPromptTemplate.from_template(
            """Act as an Elite Agronomist. Predict the top 3 crops for this farm.

**Farm:**
- Soil: {soil_type}
- Field Size: {field_size} acres
- Water Source: {water_source}
- Location: {location}
- Season: {season}
- Soil Nutrients (N/P/K): {nutrients}
- Recent Activity:
{history_narrative}

**Instructions:**
1. Suggest a high-profit companion mixed-crop for each recommendation.
2. Use the Indian Rupee (₹) symbol for all financial data (input costs and market prices).
3. Assume an Indian farming context.
4. Write all descriptive text in {language}. Keep `profit_potential` as "High", "Medium" or "Low" in English.

{format_instructions}
""",
            partial_variables={"format_instructions": self.parser.get_format_instructions()}
        )
        self.chain = self.prompt | self.llm | self.parser

    def invoke(self, user_id: str, season: Optional[str] = None, nutrients: Optional[dict] = None) -> List[PredictedCrop]:
        print("---CROP PREDICTOR AGENT---")
        ctx = self.memory.get_context(user_id)
        if ctx is None:
            print(f"---CROP PREDICTOR: No profile for {user_id}---")
            return []

        if nutrients:
            nutrients_str = f"{nutrients.get('n', '?')}/{nutrients.get('p', '?')}/{nutrients.get('k', '?')}"
        else:
            nutrients_str = "Unknown"

        try:
            response_data = self.chain.invoke({
                "soil_type": ctx["soil_type"],
                "field_size": ctx["field_size"],
                "water_source": ctx["water_source"],
                "location": ctx["location"],
                "season": season or ctx["current_season"],
                "nutrients": nutrients_str,
                "history_narrative": ctx["history_narrative"],
                "language": ctx["language_name"],
            })
            return CropPredictions.model_validate(response_data).predictions
        except Exception as e:
            print(f"---CROP PREDICTOR: LLM ERROR: {type(e).__name__} - {e}---")
            return []

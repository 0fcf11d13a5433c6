# agents/intercropping.py

from typing import Optional

from langchain_core.language_models import BaseLanguageModel
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers.json import JsonOutputParser

from core.advisory_models import IntercroppingPlan
from core.memory_service import MemoryService

class IntercroppingAgent:
    """Designs a seasonal mixed-cropping layout that maximises net profit per acre."""

    def __init__(self, llm: BaseLanguageModel, memory_service: MemoryService):
        self.llm = llm
        self.memory = memory_service
        self.parser = JsonOutputParser(pydantic_object=IntercroppingPlan)
        self.prompt = ChatPromptTemplate.from_template(
            """Act as an Agricultural ROI Architect. Suggest a Seasonal Mixed Cropping (Intercropping) plan
for {field_size} acres of {soil_type} soil.

**CONTEXT:**
- Current Month: {current_month}
- Season: {season}
- Location: {location}
- Current Crop: {current_crop}

**REQUIREMENTS:**
1. Identify a Main Crop and at least one high-profit Companion Crop suitable for the current season.
2. The combination must maximize Net Profit and Soil Nutrient Efficiency.
3. Zone percentages must add up to 100. Give every zone a hex colour.
4. All descriptive text MUST be in {language}. Keep `role` as "Main Crop", "Companion" or "Boundary" in English.

{format_instructions}
""",
            partial_variables={"format_instructions": self.parser.get_format_instructions()}
        )
        self.chain = self.prompt | self.llm | self.parser

    def invoke(self, user_id: str) -> Optional[IntercroppingPlan]:
        print("---INTERCROPPING AGENT---")
        ctx = self.memory.get_context(user_id)
        if ctx is None:
            print(f"---INTERCROPPING: No profile for {user_id}---")
            return None

        try:
            response_data = self.chain.invoke({
                "field_size": ctx["field_size"],
                "soil_type": ctx["soil_type"],
                "current_month": ctx["current_month"],
                "season": ctx["current_season"],
                "location": ctx["location"],
                "current_crop": ctx["current_crop"],
                "language": ctx["language_name"],
            })
            return IntercroppingPlan.model_validate(response_data)
        except Exception as e:
            print(f"---INTERCROPPING: LLM ERROR: {type(e).__name__} - {e}---")
            return None

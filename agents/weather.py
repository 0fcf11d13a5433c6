# agents/weather.py

from typing import List, Optional

from langchain_core.language_models import BaseLanguageModel
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers.json import JsonOutputParser

from core.advisory_models import WeatherDay, WeeklyForecast
from core.memory_service import MemoryService
from tools.weather_api import get_weather_forecast

class WeatherAgent:
    """Turns the raw 7-day forecast for the farm into day cards with field-work impact."""

    def __init__(self, llm: BaseLanguageModel, memory_service: MemoryService):
        self.llm = llm
        self.memory = memory_service
        self.parser = JsonOutputParser(pydantic_object=WeeklyForecast)
        self.prompt = ChatPromptTemplate.from_template(
            """You are an agricultural meteorologist. Generate a 7-day agri weather forecast.

**Context:**
- Location: {location}
- Season: {season}
- Current Crop: {current_crop}
- Raw 7-Day Weather Forecast: {weather_data}

**Instructions:**
1. Produce one entry per day, in order, based on the raw forecast.
2. `impact` must say what the weather means for the farmer's crop and field work.
3. MANDATORY: give a specific HEX colour for each condition.
4. All text in {language}.

{format_instructions}
""",
            partial_variables={"format_instructions": self.parser.get_format_instructions()}
        )
        self.chain = self.prompt | self.llm | self.parser

    def invoke(self, user_id: str, season: Optional[str] = None) -> List[WeatherDay]:
        print("---WEATHER AGENT (MEMORY SERVICE)---")
        ctx = self.memory.get_context(user_id)

        if not ctx or ctx.get("latitude") is None or ctx.get("longitude") is None:
            print("---WEATHER AGENT: No farm coordinates, skipping forecast---")
            return []

        weather_data = get_weather_forecast.invoke({
            "latitude": ctx["latitude"],
            "longitude": ctx["longitude"]
        })

        try:
            response_data = self.chain.invoke({
                "location": ctx["location"],
                "season": season or ctx["current_season"],
                "current_crop": ctx["current_crop"],
                "weather_data": weather_data,
                "language": ctx["language_name"],
            })
            return WeeklyForecast.model_validate(response_data).days
        except Exception as e:
            print(f"---WEATHER AGENT: LLM ERROR: {type(e).__name__} - {e}---")
            return []

import base64
import io
from typing import Optional
from PIL import Image

from langchain_core.language_models import BaseLanguageModel
from langchain_core.messages import HumanMessage
from langchain_core.output_parsers.json import JsonOutputParser

from core.advisory_models import DiagnosisResult
from core.constants import language_name
from core.models import HistoryEventType
from core.profile_manager import ProfileManager

DIAGNOSIS_PROMPT = """You are a Senior Plant Pathologist. Analyze this plant image.
IMPORTANT: Provide all text content in {language}. Keep `risk_level` as one of "Low", "Medium" or "High" in English.

{format_instructions}

Respond with ONLY the JSON object."""


class PlantDiseaseAgent:
    """
    Agent for diagnosing pests and diseases from a crop photo using a
    multimodal chat model. Every successful diagnosis is added to the
    farmer's timeline.
    """

    def __init__(self, llm: BaseLanguageModel, profile_manager: ProfileManager):
        self.llm = llm
        self.profile_manager = profile_manager
        self.parser = JsonOutputParser(pydantic_object=DiagnosisResult)

    @staticmethod
    def _to_jpeg_base64(image_data: bytes) -> str:
        image = Image.open(io.BytesIO(image_data))
        if image.mode != "RGB":
            image = image.convert("RGB")
        buffer = io.BytesIO()
        image.save(buffer, format="JPEG")
        return base64.b64encode(buffer.getvalue()).decode("ascii")

    def invoke(self, user_id: str, image_data: bytes, language: Optional[str] = None) -> Optional[DiagnosisResult]:
        print("---PLANT DISEASE AGENT---")

        if not image_data:
            print("---PLANT DISEASE AGENT: No image provided---")
            return None

        if language is None:
            profile = self.profile_manager.get_profile(user_id)
            language = profile.language.value if profile else "en"

        try:
            image_b64 = self._to_jpeg_base64(image_data)
            prompt = DIAGNOSIS_PROMPT.format(
                language=language_name(language),
                format_instructions=self.parser.get_format_instructions(),
            )
            message = HumanMessage(content=[
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{image_b64}"}},
            ])
            response = self.llm.invoke([message])
            diagnosis = DiagnosisResult.model_validate(self.parser.invoke(response))
        except Exception as e:
            print(f"Error in PlantDiseaseAgent: {type(e).__name__} - {e}")
            return None

        print(f"Diagnosis: {diagnosis.crop_name} ({diagnosis.health_score:g}%, {diagnosis.risk_level} risk)")
        self.profile_manager.add_history_event(
            user_id,
            HistoryEventType.DIAGNOSIS,
            title=f"Health Sync: {diagnosis.crop_name}",
            details=f"Health Score: {diagnosis.health_score:g}% - {diagnosis.risk_level} Risk.",
            metadata=diagnosis.model_dump(mode="json"),
        )
        return diagnosis

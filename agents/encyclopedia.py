# agents/encyclopedia.py

from typing import Optional

from langchain_core.language_models import BaseLanguageModel
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers.json import JsonOutputParser

from core.advisory_models import EncyclopediaEntry
from core.constants import language_name

class EncyclopediaAgent:
    """Looks up pests, beneficial insects, diseases and plants in an agri encyclopedia."""

    def __init__(self, llm: BaseLanguageModel):
        self.llm = llm
        self.parser = JsonOutputParser(pydantic_object=EncyclopediaEntry)
        self.prompt = ChatPromptTemplate.from_template(
            """You are an agricultural encyclopedia for Indian farmers.
Write the entry for "{query}" in {language}.

- Classify it as "Harmful", "Beneficial", "Neutral" or "Plant" (in English).
- For pests and diseases include the life cycle, control methods and organic solutions.
- `image_prompt` is a short English description for illustrating the entry.

{format_instructions}
""",
            partial_variables={"format_instructions": self.parser.get_format_instructions()}
        )
        self.chain = self.prompt | self.llm | self.parser

    def invoke(self, query: str, language: str = "en") -> Optional[EncyclopediaEntry]:
        print(f"---ENCYCLOPEDIA AGENT: '{query}'---")
        if not query.strip():
            return None
        try:
            response_data = self.chain.invoke({"query": query.strip(), "language": language_name(language)})
            return EncyclopediaEntry.model_validate(response_data)
        except Exception as e:
            print(f"---ENCYCLOPEDIA: LLM ERROR: {type(e).__name__} - {e}---")
            return None

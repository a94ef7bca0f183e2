import logging
from typing import List

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from api.prompts import COACH_PROMPT, format_recommendations_prompt

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT_MS = 25000


class CoachServiceError(Exception):
    """Raised when the Gemini API fails or returns an unusable response."""


class ActionSummary(BaseModel):
    category: str
    description: str
    co2e: float
    timestamp: str


class RecommendationInput(BaseModel):
    userId: str
    totalCO2e: float
    points: int
    badges: List[str]
    actions: List[ActionSummary]


class RecommendationsOutput(BaseModel):
    recommendations: List[str]


class CoachResponse(BaseModel):
    response: str


def create_client(api_key: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> genai.Client:
    return genai.Client(api_key=api_key, http_options=types.HttpOptions(timeout=timeout_ms))


class EcoCoach:
    """
    Recommendation and coaching flows backed by Gemini structured output.
    Failures raise CoachServiceError; nothing is retried here.
    """

    def __init__(self, client, model: str = DEFAULT_MODEL):
        self.client = client
        self.model = model

    def _generate(self, contents, system_prompt, schema, temperature):
        if self.client is None:
            raise CoachServiceError("Gemini API key is not configured")

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(
                    system_instruction=system_prompt,
                    response_mime_type="application/json",
                    response_schema=schema,
                    temperature=temperature,
                ))
        except Exception as e:
            logger.error(f"Gemini request failed: {e}", exc_info=True)
            raise CoachServiceError(str(e)) from e

        if not response.text:
            logger.error("Empty response from Gemini")
            raise CoachServiceError("Empty response from Gemini")

        try:
            return schema.model_validate_json(response.text)
        except ValidationError as e:
            logger.error(f"Gemini response did not match {schema.__name__}: {e}")
            logger.error(f"Raw response: {response.text}")
            raise CoachServiceError("Malformed response from Gemini") from e

    def get_recommendations(self, data: RecommendationInput) -> List[str]:
        prompt = format_recommendations_prompt(
            user_id=data.userId,
            total_co2e=data.totalCO2e,
            points=data.points,
            badges=data.badges,
            actions=[a.model_dump() for a in data.actions],
        )
        result = self._generate(
            "Generate personalized recommendations for this user.",
            prompt,
            RecommendationsOutput,
            temperature=0.7,
        )
        logger.info(f"Generated {len(result.recommendations)} recommendations for user {data.userId}")
        return result.recommendations

    def answer_query(self, query: str) -> str:
        result = self._generate(f"User Query: {query}", COACH_PROMPT, CoachResponse, temperature=0.7)
        return result.response

    def health_check(self) -> dict:
        if self.client is None:
            return {"status": "ERROR", "details": "No GEMINI_API_KEY environment variable found."}
        return {"status": "OK", "details": f"Gemini client configured for model {self.model}."}

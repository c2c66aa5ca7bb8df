"""Gemini LLM service implementation."""

from google import genai
from google.genai import errors

from voice_relay.exceptions import AnalysisServiceError
from voice_relay.infrastructure.interfaces import LLMService
from voice_relay.logging import setup_logging

logger = setup_logging(__name__)


class GeminiLLMService(LLMService):
    """LLM service implementation using Google Gemini."""

    def __init__(self, client: genai.Client):
        self._client = client

    def complete(self, prompt: str, model: str) -> str:
        """
        Sends a prompt to Gemini and returns the text of the reply.

        JSON output is requested, but the reply is returned unparsed.

        Raises:
            AnalysisServiceError: If the Gemini API call fails or returns nothing.
        """
        try:
            response = self._client.models.generate_content(
                model=model,
                contents=prompt,
                config={"response_mime_type": "application/json"},
            )
        except errors.APIError as e:
            logger.exception("Gemini API call failed", extra={"model": model})
            raise AnalysisServiceError(
                f"Gemini analysis failed: {e.message or e}",
                provider_status=e.code,
                provider_code=e.status,
                cause=e,
            ) from e
        except Exception as e:
            logger.exception("Gemini API call failed", extra={"model": model})
            raise AnalysisServiceError(f"Gemini analysis failed: {e}", cause=e) from e

        if not response.text:
            raise AnalysisServiceError("Gemini returned empty response")

        logger.info("LLM reply received", extra={"model": model, "length": len(response.text)})
        return response.text

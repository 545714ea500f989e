"""
Gemini client using direct REST API calls to the generateContent endpoint.
Handles a single structured-output request per call; no retries.
"""
import json
from typing import Any, Dict, Optional

import requests

from core.config import Settings, get_settings
from core.exceptions import LLMError, ResponseParseError
from core.logger import setup_logger

logger = setup_logger(__name__)


def strip_code_fences(content: str) -> str:
    """Remove a surrounding markdown code block if the model added one."""
    content_stripped = content.strip()
    if content_stripped.startswith("```"):
        lines = content_stripped.split("\n")
        if lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        content_stripped = "\n".join(lines).strip()
    return content_stripped


def extract_response_text(completion_data: Dict[str, Any]) -> str:
    """
    Extract the model's answer text from a generateContent response.

    Args:
        completion_data: Decoded response envelope

    Returns:
        Concatenated text of the first candidate's parts

    Raises:
        ResponseParseError: If the envelope holds no candidate text
    """
    candidates = completion_data.get("candidates") or []
    if not candidates:
        feedback = completion_data.get("promptFeedback")
        raise ResponseParseError(
            "Gemini returned no candidates",
            details={"prompt_feedback": feedback}
        )

    candidate = candidates[0]
    finish_reason = candidate.get("finishReason")
    if finish_reason and finish_reason != "STOP":
        logger.warning(f"Gemini finish_reason={finish_reason}")

    parts = (candidate.get("content") or {}).get("parts") or []
    text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
    if not text.strip():
        raise ResponseParseError(
            "Gemini response contains no text",
            details={"finish_reason": finish_reason}
        )
    return text


class GeminiClientWrapper:
    """Wrapper for the Gemini generateContent REST API."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize REST API client."""
        settings = settings or get_settings()

        if not settings.gemini_api_key:
            logger.warning("GEMINI_API_KEY is not set, requests will be rejected by the API")

        self.base_url = settings.gemini_base_url
        self.api_key = settings.gemini_api_key
        self.model = settings.gemini_model
        self.timeout = settings.gemini_timeout
        self.temperature = settings.gemini_temperature

        logger.info(f"Initialized Gemini REST client with model: {self.model}")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_payload(
        self,
        prompt: str,
        response_schema: Dict[str, Any],
        temperature: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Build the generateContent request body."""
        return {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]}
            ],
            "generationConfig": {
                "temperature": self.temperature if temperature is None else temperature,
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            },
        }

    def call_with_structured_output(
        self,
        prompt: str,
        response_schema: Dict[str, Any],
        temperature: Optional[float] = None,
    ) -> Any:
        """
        Call Gemini generateContent with structured output.

        Args:
            prompt: User prompt
            response_schema: Gemini response schema for structured output
            temperature: Model temperature, defaults to the configured one

        Returns:
            Parsed JSON answer

        Raises:
            LLMError: If the request fails or returns an HTTP error
            ResponseParseError: If the answer is missing or not valid JSON
        """
        payload = self.build_payload(prompt, response_schema, temperature)

        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

        try:
            response = requests.post(
                self.endpoint,
                headers=headers,
                data=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
                timeout=self.timeout
            )

            # Raise for HTTP errors (4xx, 5xx)
            response.raise_for_status()

        except requests.exceptions.Timeout as e:
            logger.error(f"Gemini request timeout after {self.timeout}s: {e}")
            raise LLMError(
                f"Gemini request timeout after {self.timeout}s",
                details={"model": self.model, "timeout": self.timeout}
            ) from e

        except requests.exceptions.HTTPError as e:
            logger.error(f"Gemini HTTP error: {e}")
            raise LLMError(
                f"Gemini returned HTTP error: {e}",
                details={
                    "model": self.model,
                    "status_code": getattr(e.response, "status_code", None),
                    "response_text": getattr(e.response, "text", None),
                }
            ) from e

        except requests.exceptions.RequestException as e:
            logger.error(f"Gemini request failed: {e}")
            raise LLMError(
                f"Failed to connect to Gemini: {e}",
                details={"model": self.model, "error": str(e)}
            ) from e

        try:
            completion_data = response.json()
        except ValueError as e:
            logger.error(f"Failed to decode Gemini response envelope: {e}")
            raise ResponseParseError(
                f"Gemini returned a non-JSON envelope: {e}",
                details={"raw_response": response.text}
            ) from e

        content = strip_code_fences(extract_response_text(completion_data))

        try:
            result = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse model answer as JSON: {e}")
            logger.debug(f"Raw answer: {content}")
            raise ResponseParseError(
                f"Model returned invalid JSON: {e}",
                details={"raw_response": content}
            ) from e

        usage = completion_data.get("usageMetadata")
        if usage:
            logger.debug(
                f"Token usage - Input: {usage.get('promptTokenCount', 'N/A')}, "
                f"Output: {usage.get('candidatesTokenCount', 'N/A')}"
            )

        return result


def create_response_schema() -> Dict[str, Any]:
    """
    Create the Gemini response schema for a chemical lookup.
    name, hStatements and isFlammable are required; error is optional.

    Returns:
        Schema dictionary in Gemini's OpenAPI subset
    """
    return {
        "type": "OBJECT",
        "properties": {
            "name": {
                "type": "STRING",
                "description": "Chemical name in Chinese"
            },
            "hStatements": {
                "type": "ARRAY",
                "items": {"type": "STRING"},
                "description": "List of H-statements (e.g. ['H225', 'H314'])"
            },
            "isFlammable": {
                "type": "BOOLEAN",
                "description": "Is it flammable?"
            },
            "error": {
                "type": "STRING",
                "nullable": True,
                "description": "Reason the CAS number is invalid, null otherwise"
            }
        },
        "required": ["name", "hStatements", "isFlammable"]
    }


# Singleton client instance
_client: Optional[GeminiClientWrapper] = None


def get_client() -> GeminiClientWrapper:
    """
    Get or create Gemini client singleton.

    Returns:
        Gemini client wrapper instance
    """
    global _client
    if _client is None:
        _client = GeminiClientWrapper()
    return _client

"""
Clients for the generative-language model that scores resumes.

The evaluator only depends on ``ModelClient``; the Gemini implementation is
constructed once at app startup and passed in, so tests can substitute a stub.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from errors import EvaluationError, EvaluationErrorKind

logger = logging.getLogger(__name__)


class ModelClient(ABC):
    """Prompt in, completion text out."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        response_schema: Optional[Dict[str, Any]] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        raise NotImplementedError


def to_gemini_schema(schema: Dict[str, Any]) -> types.Schema:
    """Convert an OpenAPI-style schema dict into a Gemini ``Schema``."""
    properties = schema.get("properties")
    items = schema.get("items")
    return types.Schema(
        type=types.Type(schema["type"].upper()),
        nullable=schema.get("nullable"),
        properties={key: to_gemini_schema(value) for key, value in properties.items()} if properties else None,
        items=to_gemini_schema(items) if items else None,
        required=schema.get("required"),
    )


class GeminiModelClient(ModelClient):
    def __init__(self, api_key: str, model_name: str) -> None:
        self.model_name = model_name
        self._client = genai.Client(api_key=api_key)

    async def generate(
        self,
        prompt: str,
        response_schema: Optional[Dict[str, Any]] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=to_gemini_schema(response_schema) if response_schema else None,
        )
        logger.debug(f"Sending prompt to {self.model_name}: {prompt[:200]}")
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as e:
            raise EvaluationError(
                EvaluationErrorKind.PROVIDER_FAILURE,
                f"Gemini API error {e.code}: {e.message}",
            ) from e
        except httpx.HTTPError as e:
            raise EvaluationError(
                EvaluationErrorKind.PROVIDER_FAILURE,
                f"Could not reach Gemini: {e}",
            ) from e

        text = response.text
        if text is None:
            # Blocked or empty candidate
            raise EvaluationError(
                EvaluationErrorKind.MALFORMED_OUTPUT,
                "Gemini returned no text",
                raw_output="",
            )
        return text

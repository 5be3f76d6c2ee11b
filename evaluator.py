import asyncio
import json
import logging
import os
from typing import Type, Union

from pydantic import ValidationError

from errors import EvaluationError, EvaluationErrorKind
from model_client import ModelClient
from models.evaluation_model import RESULT_MODELS, EvaluationResult, SchemaVariant
from prompts import RESPONSE_SCHEMAS, SYSTEM_INSTRUCTIONS, build_prompt
from utils import extract_text, strip_code_fence

logger = logging.getLogger(__name__)


def parse_model_output(raw_text: str, result_model: Type[EvaluationResult]) -> EvaluationResult:
    """Turn the model's raw completion into a validated result.

    Raises EvaluationError with MALFORMED_OUTPUT when the text is not a JSON
    object (or has fields of the wrong type), and MISSING_FIELDS when a
    required key is absent.
    """
    cleaned = strip_code_fence(raw_text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise EvaluationError(
            EvaluationErrorKind.MALFORMED_OUTPUT,
            f"Model output is not valid JSON: {e}",
            raw_output=raw_text,
        ) from e

    if not isinstance(data, dict):
        raise EvaluationError(
            EvaluationErrorKind.MALFORMED_OUTPUT,
            f"Model output is JSON {type(data).__name__}, expected an object",
            raw_output=raw_text,
        )

    try:
        return result_model.model_validate(data)
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors() if err["type"] == "missing"]
        if missing:
            raise EvaluationError(
                EvaluationErrorKind.MISSING_FIELDS,
                f"Model output is missing required fields: {', '.join(missing)}",
                raw_output=raw_text,
            ) from e
        raise EvaluationError(
            EvaluationErrorKind.MALFORMED_OUTPUT,
            f"Model output has invalid field values: {e.error_count()} error(s)",
            raw_output=raw_text,
        ) from e


class ResumeEvaluator:
    def __init__(
        self,
        client: ModelClient,
        schema_variant: SchemaVariant = SchemaVariant.BASIC,
        timeout_seconds: float = 45.0,
        max_concurrent_calls: int = 4,
    ):
        self.client = client
        self.schema_variant = schema_variant
        self.timeout_seconds = timeout_seconds
        self._result_model = RESULT_MODELS[schema_variant]
        self._model_calls = asyncio.Semaphore(max_concurrent_calls)

    async def evaluate(self, text: str) -> EvaluationResult:
        if not text.strip():
            logger.warning("Evaluating empty resume text, the model will see an empty resume")

        prompt = build_prompt(self.schema_variant, text)
        async with self._model_calls:
            try:
                raw_text = await asyncio.wait_for(
                    self.client.generate(
                        prompt,
                        response_schema=RESPONSE_SCHEMAS[self.schema_variant],
                        system_instruction=SYSTEM_INSTRUCTIONS[self.schema_variant],
                    ),
                    timeout=self.timeout_seconds,
                )
            except asyncio.TimeoutError as e:
                raise EvaluationError(
                    EvaluationErrorKind.TIMEOUT,
                    f"Model call exceeded {self.timeout_seconds:g}s",
                ) from e

        logger.debug(f"🧠 Raw LLM Output:\n{raw_text}")
        return parse_model_output(raw_text, self._result_model)

    async def score_file(self, file_path: Union[str, os.PathLike]) -> EvaluationResult:
        text = await asyncio.to_thread(extract_text, file_path)
        return await self.evaluate(text)

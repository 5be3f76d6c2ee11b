import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional

from models.evaluation_model import EvaluationResult

logger = logging.getLogger(__name__)


class ResultLog:
    """Append-only newline-delimited JSON log of successful evaluations."""

    def __init__(self, path: str):
        self.path = path

    def append(self, result: EvaluationResult, filename: Optional[str] = None) -> None:
        record = {
            "scored_at": datetime.now(timezone.utc).isoformat(),
            "filename": filename,
            "result": result.model_dump(mode="json"),
        }
        line = json.dumps(record, ensure_ascii=False) + "\n"
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line)
        except OSError as e:
            logger.warning(f"Could not append result to {self.path}: {e}")

# utils.py
import logging
import os
import re
from pathlib import Path
from typing import List, Union

import docx
import pdfplumber

from errors import ExtractionError

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt", ".text", ".md"}

_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*(?:\r?\n)?")
_TRAILING_FENCE = re.compile(r"(?:\r?\n)?[ \t]*```$")


# ✅ Remove markdown code fencing the model wraps around its JSON
def strip_code_fence(text: str) -> str:
    """Trim the text and drop an optional leading ```lang fence and trailing ``` fence.

    Text without fences is only trimmed, so applying this twice gives the
    same result as applying it once.
    """
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


# ✅ Extract plain text from an uploaded resume (PDF, DOCX or plain text)
def extract_text(file_path: Union[str, os.PathLike]) -> str:
    path = Path(file_path)
    try:
        with open(path, "rb") as f:
            header = f.read(5)
    except OSError as e:
        raise ExtractionError(f"Cannot read file '{path.name}': {e}") from e

    suffix = path.suffix.lower()
    if header == b"%PDF-" or suffix == ".pdf":
        text = _extract_pdf(path)
    elif suffix == ".docx":
        text = _extract_docx(path)
    elif suffix in TEXT_SUFFIXES or not suffix:
        text = _extract_plain(path)
    else:
        raise ExtractionError(f"Unsupported document format '{suffix}' for '{path.name}'")

    logger.info(f"Extracted {len(text)} characters from '{path.name}'")
    return text


def _extract_pdf(path: Path) -> str:
    pages: List[str] = []
    try:
        with pdfplumber.open(path) as pdf:
            for page in pdf.pages:
                pages.append(page.extract_text() or "")
    except Exception as e:
        raise ExtractionError(f"Failed to parse PDF '{path.name}': {e}") from e
    return "\n".join(p.strip() for p in pages if p.strip())


def _extract_docx(path: Path) -> str:
    try:
        document = docx.Document(str(path))
    except Exception as e:
        raise ExtractionError(f"Failed to parse DOCX '{path.name}': {e}") from e

    lines = [p.text for p in document.paragraphs if p.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines)


def _extract_plain(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ExtractionError(f"'{path.name}' is not a UTF-8 text document") from e
    except OSError as e:
        raise ExtractionError(f"Cannot read file '{path.name}': {e}") from e

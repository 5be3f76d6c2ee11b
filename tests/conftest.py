"""Shared fixtures: a stub model client, settings pointed at a temp upload dir, and document builders."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, List, Optional, Union

import docx
import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from model_client import ModelClient

JANE_DOE_REPLY = '{"name":"Jane Doe","age":23,"skills":["go","rust"],"score":0.82}'


class StubModelClient(ModelClient):
    """Returns a canned reply (or the result of a callable) and records every call."""

    def __init__(
        self,
        reply: Union[str, Callable[[str], str]] = JANE_DOE_REPLY,
        delay: float = 0.0,
        error: Optional[BaseException] = None,
    ) -> None:
        self.reply = reply
        self.delay = delay
        self.error = error
        self.prompts: List[str] = []
        self.schemas: List[Optional[dict]] = []
        self.system_instructions: List[Optional[str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def generate(self, prompt, response_schema=None, system_instruction=None) -> str:
        self.prompts.append(prompt)
        self.schemas.append(response_schema)
        self.system_instructions.append(system_instruction)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.error is not None:
                raise self.error
            return self.reply(prompt) if callable(self.reply) else self.reply
        finally:
            self.in_flight -= 1


def write_pdf(path: Path, lines: List[str]) -> Path:
    """Write a single-page PDF with one Helvetica text line per entry."""
    ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
    for line in lines:
        escaped = line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        ops.append(f"({escaped}) Tj T*")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at)

    path.write_bytes(bytes(out))
    return path


def write_docx(path: Path, paragraphs: List[str]) -> Path:
    document = docx.Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    document.save(str(path))
    return path


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "uploads"
    directory.mkdir()
    return directory


@pytest.fixture
def make_settings(upload_dir: Path) -> Callable[..., Settings]:
    def _make(**overrides) -> Settings:
        overrides.setdefault("upload_dir", str(upload_dir))
        return Settings(api_key="test-key", **overrides)

    return _make


@pytest.fixture
def make_app(make_settings):
    def _make(model_client: ModelClient, **overrides):
        return create_app(make_settings(**overrides), client=model_client)

    return _make


@pytest.fixture
def make_client(make_app) -> Callable[..., TestClient]:
    def _make(model_client: ModelClient, **overrides) -> TestClient:
        return TestClient(make_app(model_client, **overrides))

    return _make


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    return write_pdf(
        tmp_path / "resume.pdf",
        ["Jane Doe", "Skills: Go, Rust", "GitHub: github.com/janedoe"],
    )

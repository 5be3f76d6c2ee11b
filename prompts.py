"""Rubric prompts and response-format hints for each schema variant."""

from string import Template
from typing import Any, Dict

from models.evaluation_model import SchemaVariant

_RUBRIC = """Scoring Criteria (Max 20 points → normalized):

🔍 Profile Depth & Quality (10 pts)
- 2–3 focused domains (e.g., ML, web, systems) → +4
- 6+ unrelated areas → −2
- Skills backed by real projects → +5
- Skills with no project evidence → 0
- Clean formatting → +3
- Poor formatting → −3

💼 Technical Strength (6 pts)
- GitHub or portfolio with real projects → +5
- Missing/empty links → 0
- Certifications → +2
- Hackathons/societies → +2

🎓 Academic Background (4 pts)
- Tier 1 college → +4
- Tier 2 → +2
- Tier 3/unknown → 0

📌 Normalize total score as: round(raw_score / 20, 2)"""

BASIC_SYSTEM_INSTRUCTION = """You must respond only with valid JSON in this exact format:
{
  "name": "string",
  "age": number,
  "skills": ["string", "string"],
  "score": number
}"""

EXTENDED_SYSTEM_INSTRUCTION = """You must respond only with valid JSON in this exact format:
{
  "name": "string",
  "age": number,
  "skills": ["string", "string"],
  "score": number,
  "education": ["string"],
  "experience_summary": "string",
  "links": ["string"],
  "certifications": ["string"],
  "tags": ["string"],
  "tier": "string"
}"""

BASIC_TEMPLATE = Template("""
You are an intelligent resume evaluator. Given the resume text below, extract key candidate details and assign a **quality score between 0.0 and 1.0**. Be precise and strict in evaluation, do not award score if evidence is weak or missing.

Only extract the following fields in valid JSON format:

- name
- age (estimate if missing)
- skills (as array of strings)
- score (float between 0.0–1.0 based on rubric below)

$rubric
Strictly respond with JSON having only "name", "age", "skills", and "score".

Resume:
```
$resume_text
```
""")

EXTENDED_TEMPLATE = Template("""
You are an intelligent resume evaluator. Given the resume text below, extract key candidate details and assign a **quality score between 0.0 and 1.0**. Be precise and strict in evaluation, do not award score if evidence is weak or missing.

Only extract the following fields in valid JSON format:

- name
- age (estimate if missing)
- skills (as array of strings)
- score (float between 0.0–1.0 based on rubric below)
- education (array of strings, one per degree or institution)
- experience_summary (one or two sentences)
- links (array of URLs found in the resume: GitHub, portfolio, LinkedIn)
- certifications (array of strings)
- tags (array of short keywords describing the candidate's focus domains)
- tier (college tier: "tier1", "tier2" or "tier3")

$rubric
Strictly respond with JSON having only the fields listed above.

Resume:
```
$resume_text
```
""")

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

BASIC_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "age": {"type": "number", "nullable": True},
        "skills": _STRING_LIST,
        "score": {"type": "number"},
    },
    "required": ["name", "age", "score"],
}

EXTENDED_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        **BASIC_RESPONSE_SCHEMA["properties"],
        "education": _STRING_LIST,
        "experience_summary": {"type": "string", "nullable": True},
        "links": _STRING_LIST,
        "certifications": _STRING_LIST,
        "tags": _STRING_LIST,
        "tier": {"type": "string", "nullable": True},
    },
    "required": ["name", "age", "score"],
}

_TEMPLATES = {
    SchemaVariant.BASIC: BASIC_TEMPLATE,
    SchemaVariant.EXTENDED: EXTENDED_TEMPLATE,
}

SYSTEM_INSTRUCTIONS = {
    SchemaVariant.BASIC: BASIC_SYSTEM_INSTRUCTION,
    SchemaVariant.EXTENDED: EXTENDED_SYSTEM_INSTRUCTION,
}

RESPONSE_SCHEMAS = {
    SchemaVariant.BASIC: BASIC_RESPONSE_SCHEMA,
    SchemaVariant.EXTENDED: EXTENDED_RESPONSE_SCHEMA,
}


def build_prompt(variant: SchemaVariant, resume_text: str) -> str:
    return _TEMPLATES[variant].substitute(rubric=_RUBRIC, resume_text=resume_text)

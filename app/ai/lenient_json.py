"""Best-effort repair of near-JSON text returned by a text model.

Only the malformations seen from models in practice are handled: markdown
code fences, unquoted object keys and unquoted bare-word values. Anything
else is left to ``json.loads`` to reject.
"""

from __future__ import annotations

import json
import re
from typing import Any

from app.ai.errors import LenientJSONError

CODE_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*|\s*```")
UNQUOTED_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)\s*:")
BARE_WORD_VALUE_RE = re.compile(r":\s*([A-Za-z][A-Za-z0-9_]*)\s*([,}])")
OBJECT_SPAN_RE = re.compile(r"\{[\s\S]*\}")
JSON_LITERALS = frozenset({"true", "false", "null"})


def strip_code_fences(text: str) -> str:
    return CODE_FENCE_RE.sub("", text).strip()


def quote_unquoted_keys(text: str) -> str:
    return UNQUOTED_KEY_RE.sub(r'\1"\2":', text)


def quote_bare_word_values(text: str) -> str:
    def _quote(match: re.Match[str]) -> str:
        word, terminator = match.group(1), match.group(2)
        if word in JSON_LITERALS:
            return f":{word}{terminator}"
        return f':"{word}"{terminator}'

    return BARE_WORD_VALUE_RE.sub(_quote, text)


def extract_object_span(text: str) -> str:
    match = OBJECT_SPAN_RE.search(text)
    if match is None:
        raise LenientJSONError("no JSON object found in model output")
    return match.group(0)


def coerce_lenient_json(text: str) -> dict[str, Any]:
    if not text or not text.strip():
        raise LenientJSONError("model output is empty")

    repaired = strip_code_fences(text)
    repaired = quote_unquoted_keys(repaired)
    repaired = quote_bare_word_values(repaired)
    span = extract_object_span(repaired)

    try:
        parsed = json.loads(span)
    except json.JSONDecodeError as exc:
        raise LenientJSONError(f"model output is not valid JSON: {exc.msg}") from exc
    if not isinstance(parsed, dict):
        raise LenientJSONError("model output is not a JSON object")
    return parsed

"""Response interpretation.

The model is told to return bare JSON but often wraps it in prose or code
fences. These helpers locate the object, parse it, and hand a lenient
AnalysisResult to the renderers.
"""

import json
import logging
import re
from typing import Any

from tonedrift.errors import ParseError
from tonedrift.models.analysis import AnalysisResult

logger = logging.getLogger(__name__)


PARSE_FAILED = "Could not parse analysis. Please try again."

EXTRACTION_STRATEGIES = ("greedy", "balanced")

# First "{" through last "}", across newlines
_GREEDY_OBJECT = re.compile(r"\{[\s\S]*\}")


def _extract_greedy(text: str) -> str | None:
    match = _GREEDY_OBJECT.search(text)
    return match.group(0) if match else None


def _extract_balanced(text: str) -> str | None:
    """Return the first top-level object whose braces balance.

    Braces inside JSON string literals are ignored. Unbalanced candidates
    are abandoned and the scan restarts at the next "{".
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
            elif ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start:i + 1]
        start = text.find("{", start + 1)
    return None


def extract_json_span(text: str, strategy: str = "greedy") -> str:
    """Locate the JSON object inside free-form model output.

    Args:
        text: Raw completion text.
        strategy: "greedy" (first "{" to last "}") or "balanced"
                  (first structurally balanced object).

    Returns:
        The extracted span, braces included.

    Raises:
        ParseError: If no object span is found.
        ValueError: If the strategy is unknown.
    """
    if strategy == "greedy":
        span = _extract_greedy(text or "")
    elif strategy == "balanced":
        span = _extract_balanced(text or "")
    else:
        raise ValueError(f"Invalid strategy: {strategy}. Must be one of {list(EXTRACTION_STRATEGIES)}")

    if span is None:
        logger.info("No JSON object in model output (%d chars)", len(text or ""))
        raise ParseError(PARSE_FAILED)
    return span


def parse_analysis(text: str, strategy: str = "greedy") -> dict[str, Any]:
    """Extract and decode the analysis object.

    No schema checks happen here; missing fields are the renderer's concern.

    Raises:
        ParseError: If no object is found or it is not valid JSON.
    """
    span = extract_json_span(text, strategy=strategy)
    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        logger.info("Malformed JSON in model output: %s", e)
        raise ParseError(PARSE_FAILED) from e

    if not isinstance(data, dict):
        raise ParseError(PARSE_FAILED)
    return data


def interpret(text: str, strategy: str = "greedy") -> AnalysisResult:
    """Parse raw model output into an AnalysisResult."""
    return AnalysisResult.from_payload(parse_analysis(text, strategy=strategy))

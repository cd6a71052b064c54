"""
Description:
Parse the JSON payload out of a raw oracle completion.

Models regularly wrap JSON in markdown fences or add a sentence before it; both
are stripped before decoding. Anything that still fails to decode is reported
as a ValueError so callers can map it to their own error kind.

Dependencies:
- interview_core.constants.regex_patterns: For the fence and body patterns.
- json: For decoding.
- loguru: For logging parse failures.
"""
import json
from typing import Any
from loguru import logger
from interview_core.constants.regex_patterns import REGEX_PATTERNS


def parse_oracle_json(content: str) -> Any:
    """
    Decode the JSON object or array contained in an oracle response.

    Args:
        content: Raw completion text

    Returns:
        The decoded JSON value

    Raises:
        ValueError: If the content is empty or holds no decodable JSON
    """
    if not content or not content.strip():
        raise ValueError("Empty response received from oracle")

    clean_text = REGEX_PATTERNS['code_fence'].sub("", content).strip()
    try:
        return json.loads(clean_text)
    except json.JSONDecodeError:
        pass

    match = REGEX_PATTERNS['json_body'].search(clean_text)
    if match:
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError as e:
            logger.error(f"JSON parsing error: {e}")

    logger.error(f"Content that failed to parse: {content[:200]}")
    raise ValueError("Oracle response is not valid JSON")

"""
Description:
Precompiled regex patterns used when cleaning up oracle responses.

Dependencies:
- re: Python's built-in regular expression module for pattern matching.
"""

import re

REGEX_PATTERNS = {
    # Markdown code fences some models wrap their JSON in
    'code_fence': re.compile(r"```(?:json)?", re.IGNORECASE),
    # Outermost JSON object or array in a chatty response
    'json_body': re.compile(r"(\{.*\}|\[.*\])", re.DOTALL),
}

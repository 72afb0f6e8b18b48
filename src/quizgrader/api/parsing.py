"""
Request body parsing for the answer endpoint.
Returns a value for either outcome instead of raising.
"""

import json
from dataclasses import dataclass
from typing import Union

from quizgrader.domain.errors import MalformedRequestBody

INVALID_BODY = "Invalid request body"
LABEL_NOT_STRING = "submittedLabel must be a string"


@dataclass(frozen=True)
class ParsedAnswerBody:
    submitted_label: str


def parse_answer_body(raw: bytes) -> Union[ParsedAnswerBody, MalformedRequestBody]:
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, ValueError, RecursionError):
        return MalformedRequestBody(INVALID_BODY)

    if not isinstance(payload, dict):
        return MalformedRequestBody(INVALID_BODY)

    label = payload.get("submittedLabel")
    if not isinstance(label, str):
        return MalformedRequestBody(LABEL_NOT_STRING)

    return ParsedAnswerBody(submitted_label=label)

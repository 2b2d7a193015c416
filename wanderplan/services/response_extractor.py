# wanderplan/services/response_extractor.py

"""Pull the JSON payload out of a free-form model reply."""

from dataclasses import dataclass
from re import DOTALL, IGNORECASE
from re import compile as re_compile
from typing import Any

from orjson import JSONDecodeError, loads

from wanderplan.errors import MalformedResponse
from wanderplan.monitoring import get_logger
from wanderplan.utils.helpers import truncate

logger = get_logger(__name__)

# First ```json ... ``` block, non-greedy so a later fence is never swallowed
JSON_FENCE = re_compile(r"```json\s*(.*?)\s*```", DOTALL | IGNORECASE)


@dataclass(frozen=True, slots=True)
class ExtractedPayload:
    """
    Parsed JSON payload and how it was found.

    Attributes:
        data: The parsed JSON value.
        candidate: The exact text that was parsed.
        fenced: True when the text came from a ```json fence, False for the
            whole-reply fallback.
    """

    data: Any
    candidate: str
    fenced: bool


def find_json_candidate(raw_text: str) -> tuple[str, bool]:
    """
    Locate the JSON candidate in a reply.

    Args:
        raw_text: The model reply.

    Returns:
        The trimmed candidate text and whether it came from a fence.
    """
    if match := JSON_FENCE.search(raw_text):
        return match.group(1).strip(), True
    return raw_text.strip(), False


def extract_json_payload(raw_text: str) -> ExtractedPayload:
    """
    Extract and strictly parse the JSON payload of a model reply.

    Parsing is all-or-nothing: no repair and no lenient JSON.

    Args:
        raw_text: The model reply, possibly wrapped in prose.

    Returns:
        The parsed payload.

    Raises:
        MalformedResponse: If the candidate text is not valid JSON. The
            candidate is attached as ``fragment``.
    """
    candidate, fenced = find_json_candidate(raw_text)
    extraction_path = "fenced" if fenced else "raw"

    if not fenced:
        logger.warning(
            "No ```json block found, parsing the raw response as JSON",
            extraction_path=extraction_path,
            length=len(candidate),
        )

    try:
        data = loads(candidate)
    except JSONDecodeError as e:
        logger.error(
            "Failed to parse JSON response",
            extraction_path=extraction_path,
            error=str(e),
            fragment=truncate(candidate),
        )
        raise MalformedResponse(fragment=candidate) from e

    logger.debug("Parsed JSON payload", extraction_path=extraction_path)
    return ExtractedPayload(data=data, candidate=candidate, fenced=fenced)

from collections.abc import Generator

import pytest
from pytest_mock.plugin import MockerFixture
from structlog import get_logger as struct_logger
from structlog.testing import capture_logs
from structlog.types import EventDict

from wanderplan.errors import MalformedResponse
from wanderplan.services import response_extractor
from wanderplan.services.response_extractor import extract_json_payload, find_json_candidate


class TestFindJsonCandidate:
    """Tests for locating the JSON text in a reply."""

    def test_fenced_block_is_trimmed(self) -> None:
        raw = 'Sure!\n```json\n  {"itinerary": []}  \n```\nHave fun.'
        assert find_json_candidate(raw) == ('{"itinerary": []}', True)

    def test_first_fence_wins(self) -> None:
        """A later fence is never merged into the first one."""
        raw = '```json\n{"a": 1}\n```\ntext\n```json\n{"b": 2}\n```'
        assert find_json_candidate(raw) == ('{"a": 1}', True)

    def test_fence_tag_is_case_insensitive(self) -> None:
        assert find_json_candidate('```JSON\n{"a": 1}\n```') == ('{"a": 1}', True)

    def test_falls_back_to_whole_reply(self) -> None:
        assert find_json_candidate('  {"a": 1}\n') == ('{"a": 1}', False)


class TestExtractJsonPayload:
    """Tests for strict JSON extraction."""

    def test_parses_fenced_payload(self) -> None:
        payload = extract_json_payload('Plan:\n```json\n{"itinerary": [], "summary": "x"}\n```')

        assert payload.data == {"itinerary": [], "summary": "x"}
        assert payload.fenced is True

    def test_parses_unfenced_payload(self) -> None:
        payload = extract_json_payload('{"itinerary": []}')

        assert payload.data == {"itinerary": []}
        assert payload.fenced is False
        assert payload.candidate == '{"itinerary": []}'

    def test_prose_without_json_is_malformed(self) -> None:
        """A reply with neither a fence nor JSON fails with the whole reply attached."""
        with pytest.raises(MalformedResponse) as exc_info:
            extract_json_payload("Sorry, I cannot help with that.")

        assert exc_info.value.fragment == "Sorry, I cannot help with that."
        assert exc_info.value.status_code == 502

    def test_broken_fenced_json_is_malformed(self) -> None:
        """Parsing is strict: trailing commas are not repaired."""
        with pytest.raises(MalformedResponse) as exc_info:
            extract_json_payload('```json\n{"itinerary": [],}\n```')

        assert exc_info.value.fragment == '{"itinerary": [],}'

    def test_fragment_is_the_raw_candidate(self) -> None:
        with pytest.raises(MalformedResponse) as exc_info:
            extract_json_payload("```json\n{bad json\n```")

        assert exc_info.value.fragment == "{bad json"

    def test_truncated_json_is_malformed(self) -> None:
        with pytest.raises(MalformedResponse):
            extract_json_payload('```json\n{"itinerary": [{"day": 1\n```')

    def test_empty_fence_is_malformed(self) -> None:
        with pytest.raises(MalformedResponse) as exc_info:
            extract_json_payload("```json\n```")

        assert exc_info.value.fragment == ""


@pytest.fixture
def captured_logs(mocker: MockerFixture) -> Generator[list[EventDict]]:
    """Capture this module's log events, bypassing any logger cached earlier."""
    mocker.patch.object(response_extractor, "logger", struct_logger(response_extractor.__name__))
    with capture_logs() as logs:
        yield logs


class TestExtractionLogging:
    """Tests for the log trail telling fenced and raw extraction apart."""

    def test_raw_fallback_is_flagged(self, captured_logs: list[EventDict]) -> None:
        extract_json_payload('{"itinerary": []}')

        warnings = [e for e in captured_logs if e["log_level"] == "warning"]
        assert len(warnings) == 1
        assert warnings[0]["extraction_path"] == "raw"

    def test_fenced_path_is_not_flagged(self, captured_logs: list[EventDict]) -> None:
        extract_json_payload('```json\n{"itinerary": []}\n```')

        assert not [e for e in captured_logs if e["log_level"] == "warning"]
        assert [e["extraction_path"] for e in captured_logs] == ["fenced"]

    def test_parse_failure_logs_its_path(self, captured_logs: list[EventDict]) -> None:
        with pytest.raises(MalformedResponse):
            extract_json_payload("not json at all")

        errors = [e for e in captured_logs if e["log_level"] == "error"]
        assert errors[0]["extraction_path"] == "raw"

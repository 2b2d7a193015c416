from time import perf_counter
from unittest.mock import MagicMock

from wanderplan.utils import host, time_taken, truncate


def test_host() -> None:
    request = MagicMock()
    request.client.host = "10.0.0.7"
    assert host(request) == "10.0.0.7"

    request.client = None
    assert host(request) == "unknown"


def test_time_taken_format() -> None:
    assert time_taken(perf_counter()).endswith("s")


def test_truncate() -> None:
    assert truncate("short", 10) == "short"
    assert truncate("abcdefghij", 4) == "abcd... [6 more chars]"

import re

import pytest

from mockserve.paths import (
    HISTORY_PATH,
    MOCK_PATH,
    MOCKS_PATH,
    PING_PATH,
    VERIFY_PATH,
    get_path_param,
)

MOCK_RE = re.compile(r"^/__httpmock__/mocks/([0-9]+)$")


@pytest.mark.parametrize(
    "regex, path, expected",
    [
        (MOCK_PATH, "/__httpmock__/mocks/1", True),
        (MOCK_PATH, "/__httpmock__/mocks/1295473892374", True),
        (MOCK_PATH, "/__httpmock__/mocks/abc", False),
        (MOCK_PATH, "/__httpmock__/mocks", False),
        (MOCK_PATH, "/__httpmock__/mocks/345345/test", False),
        (MOCK_PATH, "test/__httpmock__/mocks/345345/test", False),
        (PING_PATH, "/__httpmock__/ping", True),
        (PING_PATH, "/__httpmock__/ping/1295473892374", False),
        (PING_PATH, "test/ping/1295473892374", False),
        (VERIFY_PATH, "/__httpmock__/verify", True),
        (VERIFY_PATH, "/__httpmock__/verify/1295473892374", False),
        (VERIFY_PATH, "test/verify/1295473892374", False),
        (HISTORY_PATH, "/__httpmock__/history", True),
        (HISTORY_PATH, "/__httpmock__/history/1295473892374", False),
        (HISTORY_PATH, "test/history/1295473892374", False),
        (MOCKS_PATH, "/__httpmock__/mocks", True),
        (MOCKS_PATH, "/__httpmock__/mocks/5", False),
        (MOCKS_PATH, "test/__httpmock__/mocks/5", False),
        (MOCKS_PATH, "test/__httpmock__/mocks/567", False),
    ],
)
def test_route_regexes(regex, path, expected):
    assert (regex.search(path) is not None) is expected


def test_get_path_param_returns_id():
    assert get_path_param(MOCK_PATH, 1, "/__httpmock__/mocks/42") == 42


def test_get_path_param_regex_error():
    with pytest.raises(ValueError, match="Error capturing parameter from request path"):
        get_path_param(MOCK_RE, 0, "")


def test_get_path_param_index_error():
    with pytest.raises(ValueError) as info:
        get_path_param(MOCK_RE, 5, "/__httpmock__/mocks/5")
    assert str(info.value) == (
        "Error capturing resource id in request path: /__httpmock__/mocks/5"
    )


def test_get_path_param_number_error():
    with pytest.raises(ValueError) as info:
        get_path_param(MOCK_RE, 0, "/__httpmock__/mocks/9999999999999999999999999")
    assert str(info.value) == "Error parsing id as a number: invalid digit found in string"


def test_get_path_param_overflow():
    with pytest.raises(ValueError) as info:
        get_path_param(MOCK_RE, 1, "/__httpmock__/mocks/9999999999999999999999999")
    assert str(info.value) == (
        "Error parsing id as a number: number too large to fit in target type"
    )
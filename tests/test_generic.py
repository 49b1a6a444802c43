import pytest

from mockserve import sources, targets
from mockserve.comparators import (
    AnyValueComparator,
    FunctionMatchesRequestComparator,
    StringExactMatchComparator,
)
from mockserve.generic import FunctionValueMatcher, MultiValueMatcher, SingleValueMatcher
from mockserve.model import HttpMockRequest, RequestRequirements, Tokenizer, levenshtein


def path_matcher(weight=10):
    return SingleValueMatcher(
        "path", sources.string_path_source, targets.path_target,
        StringExactMatchComparator(False), with_reason=True, weight=weight,
    )


def body_matcher():
    return SingleValueMatcher(
        "body", sources.string_body_source, targets.string_body_target,
        StringExactMatchComparator(False), with_reason=False, diff_with=Tokenizer.LINE,
    )


def header_matcher():
    return MultiValueMatcher(
        "header", sources.header_source, targets.header_target,
        StringExactMatchComparator(False), StringExactMatchComparator(True),
    )


def header_exists_matcher():
    return MultiValueMatcher(
        "header", sources.header_exists_source, targets.header_target,
        StringExactMatchComparator(False), AnyValueComparator(),
    )


def function_matcher():
    return FunctionValueMatcher(
        "user provided matcher function", sources.function_source,
        targets.full_request_target, FunctionMatchesRequestComparator(), weight=1,
    )


def test_single_value_matches_equal_path():
    req = HttpMockRequest("GET", "/test-path")
    mock = RequestRequirements(path="/test-path")
    matcher = path_matcher()
    assert matcher.matches(req, mock) is True
    assert matcher.distance(req, mock) == 0
    assert matcher.mismatches(req, mock) == []


def test_single_value_no_requirement_matches():
    req = HttpMockRequest("GET", "/anything")
    assert path_matcher().matches(req, RequestRequirements()) is True


def test_single_value_mismatch_reports_reason():
    req = HttpMockRequest("GET", "/abc")
    mock = RequestRequirements(path="/xyz")
    matcher = path_matcher()
    assert matcher.matches(req, mock) is False
    mismatches = matcher.mismatches(req, mock)
    assert len(mismatches) == 1
    assert mismatches[0].title == "The path does not match"
    assert mismatches[0].reason.expected == "/xyz"
    assert mismatches[0].reason.actual == "/abc"
    assert mismatches[0].reason.comparison == "equals"
    assert mismatches[0].reason.best_match is False
    assert mismatches[0].diff is None


@pytest.mark.parametrize("weight", [1, 3, 10])
def test_single_value_distance_scales_with_weight(weight):
    req = HttpMockRequest("GET", "/abc")
    mock = RequestRequirements(path="/abd")
    assert path_matcher(weight).distance(req, mock) == weight * path_matcher(1).distance(req, mock)
    assert path_matcher(1).distance(req, mock) == levenshtein("/abd", "/abc")


def test_single_value_body_diff_without_reason():
    req = HttpMockRequest("POST", "/", body=b"some text")
    mock = RequestRequirements(body="some other text")
    mismatches = body_matcher().mismatches(req, mock)
    assert len(mismatches) == 1
    assert mismatches[0].reason is None
    assert mismatches[0].diff.tokenizer is Tokenizer.LINE


def test_single_value_missing_request_value_is_unmatched():
    req = HttpMockRequest("POST", "/")
    mock = RequestRequirements(body="x")
    matcher = body_matcher()
    assert matcher.matches(req, mock) is False
    assert len(matcher.mismatches(req, mock)) == 1


def test_multi_value_superset_matches():
    req = HttpMockRequest("GET", "/", headers=[("h1", "v1"), ("h2", "v2")])
    mock = RequestRequirements(headers=[("H1", "v1")])
    assert header_matcher().matches(req, mock) is True
    assert header_matcher().distance(req, mock) == 0


def test_multi_value_best_match_reason():
    req = HttpMockRequest("GET", "/", headers=[("h1", "v1")])
    mock = RequestRequirements(headers=[("h1", "v2")])
    matcher = header_matcher()
    assert matcher.matches(req, mock) is False
    mismatches = matcher.mismatches(req, mock)
    assert len(mismatches) == 1
    assert mismatches[0].title == (
        "Expected header with name 'h1' and value 'v2' to be present in the request but it wasn't."
    )
    reason = mismatches[0].reason
    assert reason.expected == "h1=v2"
    assert reason.actual == "h1=v1"
    assert reason.comparison == "key=equals, value=equals"
    assert reason.best_match is True


def test_multi_value_exists_title_without_value():
    req = HttpMockRequest("GET", "/", headers=[("other", "v")])
    mock = RequestRequirements(header_exists=["wanted"])
    mismatches = header_exists_matcher().mismatches(req, mock)
    assert mismatches[0].title == (
        "Expected header with name 'wanted' to be present in the request but it wasn't."
    )
    assert mismatches[0].reason.comparison == "key=equals, value=any"
    assert mismatches[0].reason.expected == "wanted"


def test_multi_value_no_request_values_has_no_reason():
    req = HttpMockRequest("GET", "/")
    mock = RequestRequirements(headers=[("h1", "v1")])
    matcher = header_matcher()
    mismatches = matcher.mismatches(req, mock)
    assert mismatches[0].reason is None
    assert matcher.distance(req, mock) == levenshtein("h1", "") + levenshtein("v1", "")


def test_multi_value_requires_value_when_mock_has_one():
    matcher = MultiValueMatcher(
        "thing", sources.header_source, lambda req: [("k", None)],
        StringExactMatchComparator(True), StringExactMatchComparator(True),
    )
    req = HttpMockRequest("GET", "/")
    assert matcher.matches(req, RequestRequirements(headers=[("k", "v")])) is False
    assert matcher.matches(req, RequestRequirements(header_exists=["k"])) is True


def test_function_matcher_reports_failing_position():
    req = HttpMockRequest("GET", "/")
    mock = RequestRequirements(matchers=[lambda r: True, lambda r: r.path == "/nope"])
    matcher = function_matcher()
    assert matcher.matches(req, mock) is False
    assert matcher.distance(req, mock) == 1
    titles = [m.title for m in matcher.mismatches(req, mock)]
    assert titles == ["The user provided matcher function at position 2 does not match"]


def test_function_matcher_passes_request():
    seen = []
    req = HttpMockRequest("GET", "/x")
    mock = RequestRequirements(matchers=[lambda r: seen.append(r) or True])
    assert function_matcher().matches(req, mock) is True
    assert seen == [req]
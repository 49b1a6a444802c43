# mockserve

mockserve holds the request-matching core of an HTTP mock server. It decides
whether a recorded HTTP request meets a mock's requirements. When it does not,
mockserve scores how far off the request is and describes each requirement it
misses. It has no dependencies outside the standard library.

## Data model (`mockserve.model`)

- `HttpMockRequest(method, path, headers=None, query_params=None, body=None)`:
  a received request. Headers and query parameters are lists of `(name, value)`
  pairs, and the body is `bytes`.
- `RequestRequirements`: everything a mock may expect. Fields left at `None`
  are not checked. The fields are `path`, `path_contains`, `path_matches`,
  `method`, `headers`, `header_exists`, `cookies`, `cookie_exists`, `body`,
  `json_body`, `json_body_includes`, `body_contains`, `body_matches`,
  `query_param`, `query_param_exists`, `x_www_form_urlencoded`,
  `x_www_form_urlencoded_key_exists` and `matchers`. `matchers` holds Python
  callables that take the request and return a bool.
- `MockServerHttpResponse(status, headers, body, delay)`,
  `MockDefinition(request, response)` and `ActiveMock(id, definition,
  call_counter, is_static)`.
- `Mismatch`, `Reason`, `DiffResult`, `Diff`, `ClosestMatch` and the
  `Tokenizer` enum (`LINE`, `WORD`, `CHARACTER`).

`RequestRequirements`, `MockServerHttpResponse` and `MockDefinition` have
`from_dict` and `to_dict`. Patterns are read and written as regular-expression
strings. A response delay is given in milliseconds. A body may be given as
text. `to_dict` leaves out the user callables in `matchers`.

The module also has these helpers:

- `diff_str(base, edit, tokenizer)`: a token diff with a similarity ratio.
- `levenshtein(a, b)`: the edit distance between two strings.
- `distance_for(expected, actual)`: the edit distance between the text forms
  of two values, where `None` counts as empty.
- `parse_cookies(req)`: reads the `Cookie` header as pairs and raises
  `ValueError` if the header is malformed.

## Building blocks

- **Sources** (`mockserve.sources`) take the expected values out of a
  `RequestRequirements`. Examples are `string_path_source`, `header_source`,
  `header_exists_source` and `function_source`. Each returns `None` when the
  mock sets nothing.
- **Targets** (`mockserve.targets`) take the actual values out of an
  `HttpMockRequest`. Examples are `path_target`, `header_target`,
  `json_body_target`, `cookie_target` and `form_urlencoded_body_target`.
- **Comparators** (`mockserve.comparators`) each provide `matches`, `name` and
  `distance`. They are `StringExactMatchComparator(case_sensitive)`,
  `StringContainsMatchComparator(case_sensitive)`,
  `StringRegexMatchComparator`, `JSONExactMatchComparator`,
  `JSONContainsMatchComparator`, `AnyValueComparator` and
  `FunctionMatchesRequestComparator`.
- **Transformers** (`mockserve.transformers`) are `DecodeBase64ValueTransformer`
  and `ToLowercaseTransformer`. They raise `ValueError` on input they cannot
  handle.

## Matchers (`mockserve.generic`)

Each matcher combines a source, a target and a comparator, and provides
`matches(req, mock)`, `distance(req, mock)` and `mismatches(req, mock)`. The
distance is multiplied by the matcher's `weight`.

- `SingleValueMatcher` compares every expected value with one request value.
  It can attach a `Reason` and a diff, and the `diff_with` setting chooses the
  tokenizer for the diff.
- `MultiValueMatcher` requires every expected key, and every expected value
  where one is given, to be present in the request. For each one that is
  missing, it reports the closest request entry.
- `FunctionValueMatcher` runs user predicates against the whole request and
  reports each failing predicate by its position.

```python
from mockserve.comparators import StringExactMatchComparator
from mockserve.generic import SingleValueMatcher
from mockserve.model import HttpMockRequest, RequestRequirements
from mockserve.sources import string_path_source
from mockserve.targets import path_target

path_matcher = SingleValueMatcher(
    entity_name="path",
    source=string_path_source,
    target=path_target,
    comparator=StringExactMatchComparator(False),
    weight=10,
)

req = HttpMockRequest("GET", "/users/1")
mock = RequestRequirements(path="/users/2")

path_matcher.matches(req, mock)        # False
path_matcher.distance(req, mock)       # 10 (one edit, weight 10)
path_matcher.mismatches(req, mock)[0].title   # "The path does not match"
```

## Other helpers

- `mockserve.util` has mapping checks for header-like data: `contains`,
  `contains_entry`, `contains_with_case_insensitive_key`,
  `contains_entry_with_case_insensitive_key`, `contains_case_insensitive_key`
  and `get_case_insensitive`.
- `mockserve.messages` has the `ServerRequestHeader` and `ServerResponse`
  records. Its `extract_headers` lower-cases header names and raises
  `ValueError` when a value contains anything other than visible ASCII.
- `mockserve.paths` has the management path patterns under `/__httpmock__`:
  `PING_PATH`, `MOCKS_PATH`, `MOCK_PATH`, `HISTORY_PATH` and `VERIFY_PATH`.
  Its `get_path_param(regex, idx, path)` reads a numeric id from a path and
  raises `ValueError` when the path does not match, the capture group is
  missing or the id is not a valid number.

## What this package does not do

mockserve does not run an HTTP server. It has no store of active mocks and
no request history. It does not verify past requests against a mock, and it
does not load mocks from YAML files. It provides no command-line program. It
gives you the matching, scoring and reporting pieces. Serving requests and
keeping state are left to the code that uses it.
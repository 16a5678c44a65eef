"""Unit tests for the outbound response sanitizer."""

import pytest

from storefront.services.sanitizer import RawResponse, sanitize


@pytest.mark.unit
def test_only_content_type_survives():
    raw = RawResponse(
        status=200,
        body=b'{"id": "cs_1"}',
        headers=(
            ("Date", "Mon, 19 Oct 2026 10:00:00 GMT"),
            ("Content-Type", "application/json"),
            ("Request-Id", "req_abc"),
            ("Idempotency-Key", "xyz"),
        ),
    )

    clean = sanitize(raw)

    assert clean.headers == (("Content-Type", "application/json"),)
    assert clean.status == 200
    assert clean.body == raw.body


@pytest.mark.unit
def test_header_names_compared_case_insensitively():
    raw = RawResponse(status=402, body=b"", headers=(("content-type", "text/plain"), ("CONTENT-TYPE", "x")))

    assert sanitize(raw).headers == (("content-type", "text/plain"), ("CONTENT-TYPE", "x"))


@pytest.mark.unit
def test_sanitize_is_deterministic_across_volatile_headers():
    body = b'{"status": "complete"}'
    first = RawResponse(200, body, (("Date", "t1"), ("Request-Id", "a"), ("Content-Type", "application/json")))
    second = RawResponse(200, body, (("Date", "t2"), ("Request-Id", "b"), ("Content-Type", "application/json")))

    assert sanitize(first) == sanitize(second)
    assert sanitize(first) == sanitize(sanitize(first))


@pytest.mark.unit
def test_sanitize_does_not_touch_input():
    raw = RawResponse(500, b"boom", (("Server", "nginx"),))

    clean = sanitize(raw)

    assert clean.headers == ()
    assert raw.headers == (("Server", "nginx"),)

import uuid

from backend.session.cookies import (
    SESSION_COOKIE_NAME,
    is_valid_session_id,
    new_session_id,
    parse_cookie_header,
    resolve_session_id,
)

EXISTING = "123e4567-e89b-12d3-a456-426614174000"


class RecordingGenerator:
    def __init__(self, value: str) -> None:
        self.value = value
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return self.value


def test_parse_cookie_header_splits_pairs():
    assert parse_cookie_header("first=one; second=two") == {"first": "one", "second": "two"}


def test_parse_cookie_header_skips_malformed_parts():
    assert parse_cookie_header(";; =orphan; flag; empty=; kept=a=b") == {"kept": "a=b"}


def test_parse_cookie_header_percent_decodes_values():
    assert parse_cookie_header("name=hello%20world") == {"name": "hello world"}


def test_invalid_percent_encoding_is_kept_raw():
    assert parse_cookie_header("first=%E0%A4%A") == {"first": "%E0%A4%A"}


def test_parse_cookie_header_handles_missing_header():
    assert parse_cookie_header(None) == {}
    assert parse_cookie_header("") == {}


def test_is_valid_session_id():
    assert is_valid_session_id(EXISTING) is True
    assert is_valid_session_id(EXISTING.upper()) is True
    assert is_valid_session_id("not-a-uuid") is False
    assert is_valid_session_id(None) is False
    # version nibble 0 and variant nibble c are outside the accepted shape
    assert is_valid_session_id("123e4567-e89b-02d3-a456-426614174000") is False
    assert is_valid_session_id("123e4567-e89b-12d3-c456-426614174000") is False


def test_generates_new_session_when_cookie_missing():
    generate = RecordingGenerator("generated-session")

    resolution = resolve_session_id(None, generate)

    assert resolution.session_id == "generated-session"
    assert resolution.should_set_cookie is True
    assert generate.calls == 1


def test_reuses_valid_session_cookie():
    generate = RecordingGenerator("should-not-be-used")

    resolution = resolve_session_id(f"other=1; {SESSION_COOKIE_NAME}={EXISTING}", generate)

    assert resolution.session_id == EXISTING
    assert resolution.should_set_cookie is False
    assert generate.calls == 0


def test_rotates_session_when_cookie_is_tampered():
    generate = RecordingGenerator("new-session")

    resolution = resolve_session_id(f"{SESSION_COOKIE_NAME}=not-a-uuid", generate)

    assert resolution.session_id == "new-session"
    assert resolution.should_set_cookie is True
    assert generate.calls == 1


def test_default_generator_mints_uuid4():
    resolution = resolve_session_id(None)

    assert is_valid_session_id(resolution.session_id)
    assert uuid.UUID(resolution.session_id).version == 4
    assert new_session_id() != new_session_id()


def test_rejects_uuid_with_trailing_newline():
    assert is_valid_session_id(EXISTING + "\n") is False
    assert is_valid_session_id(EXISTING + "\r\n") is False


def test_rotates_session_when_cookie_decodes_to_trailing_newline():
    generate = RecordingGenerator("fresh")

    resolution = resolve_session_id(f"{SESSION_COOKIE_NAME}={EXISTING}%0A", generate)

    assert resolution.session_id == "fresh"
    assert resolution.should_set_cookie is True
    assert generate.calls == 1

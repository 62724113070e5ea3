import json

import pytest

from services.analysis.errors import (
    InvalidResultShapeError,
    ReplyDecodeError,
    UnparsableReplyError,
)
from services.analysis.response_parser import (
    extract_json_candidate,
    parse_reply,
    validate_result_shape,
)


# ── extract_json_candidate ────────────────────────────────────────────────────


def test_extract_plain_object():
    assert extract_json_candidate('{"date": "2024-01-01"}') == '{"date": "2024-01-01"}'


def test_extract_strips_prose_and_fences():
    text = 'Sure!\n```json\n{"a": 1}\n```\nHope this helps.'
    assert extract_json_candidate(text) == '{"a": 1}'


def test_extract_spans_first_open_to_last_close():
    text = 'x {"a": {"b": 1}} y {"c": 2} z'
    assert extract_json_candidate(text) == '{"a": {"b": 1}} y {"c": 2}'


def test_extract_returns_none_without_braces():
    assert extract_json_candidate("Sorry, I cannot process this.") is None


def test_extract_returns_none_for_truncated_output():
    assert extract_json_candidate('{"date": "2024-03-01", "items": [') is None


def test_extract_handles_empty_text():
    assert extract_json_candidate("") is None


# ── parse_reply ───────────────────────────────────────────────────────────────


def test_parse_reply_preserves_key_order_and_content():
    reply = 'prefix {"items": [], "date": "2024-03-01", "extra": {"k": 1}} suffix'
    parsed = parse_reply(reply)
    assert list(parsed) == ["items", "date", "extra"]
    assert parsed == {"items": [], "date": "2024-03-01", "extra": {"k": 1}}


def test_parse_reply_keeps_nested_braces_in_strings():
    reply = '{"date": "2024-03-01", "items": [{"name": "{weird}", "value": "1", "unit": ""}]}'
    assert parse_reply(reply)["items"][0]["name"] == "{weird}"


def test_parse_reply_without_json_carries_raw_text():
    reply = "Sorry, I cannot process this."
    with pytest.raises(UnparsableReplyError) as exc_info:
        parse_reply(reply)
    assert exc_info.value.raw == reply
    assert exc_info.value.to_payload() == {
        "error": "Failed to extract JSON from response",
        "raw": reply,
    }


def test_parse_reply_with_two_objects_is_a_decode_failure():
    with pytest.raises(ReplyDecodeError) as exc_info:
        parse_reply('{"a": 1} and also {"b": 2}')
    payload = exc_info.value.to_payload()
    assert payload["error"] == "Failed to analyze image"
    assert payload["details"]


# ── validate_result_shape ─────────────────────────────────────────────────────


def test_validate_accepts_empty_items():
    validate_result_shape({"date": "2024-03-01", "items": []})


def test_validate_rejects_missing_date():
    with pytest.raises(InvalidResultShapeError):
        validate_result_shape({"items": []})


@pytest.mark.parametrize("date", ["", None, 20240301])
def test_validate_rejects_unusable_date(date):
    with pytest.raises(InvalidResultShapeError):
        validate_result_shape({"date": date, "items": []})


@pytest.mark.parametrize("items", [None, "none", {"name": "x"}])
def test_validate_rejects_non_list_items(items):
    with pytest.raises(InvalidResultShapeError):
        validate_result_shape({"date": "2024-03-01", "items": items})


def test_validate_lenient_passes_incomplete_items():
    validate_result_shape({"date": "2024-03-01", "items": [{"name": "身長"}, "junk"]})


def test_validate_strict_rejects_incomplete_items():
    with pytest.raises(InvalidResultShapeError, match="item 0"):
        validate_result_shape({"date": "2024-03-01", "items": [{"name": "身長"}]}, strict_items=True)


def test_validate_strict_rejects_numeric_values():
    parsed = json.loads('{"date": "2024-03-01", "items": [{"name": "体重", "value": 60, "unit": "kg"}]}')
    with pytest.raises(InvalidResultShapeError):
        validate_result_shape(parsed, strict_items=True)


def test_validate_strict_accepts_well_shaped_items():
    validate_result_shape(
        {
            "date": "2024-03-01",
            "items": [
                {"name": "血圧", "value": "120", "unit": "mmHg"},
                {"name": "血圧", "value": "120", "unit": "mmHg"},
            ],
        },
        strict_items=True,
    )


def test_invalid_shape_payload_has_no_details():
    error = InvalidResultShapeError("missing or empty 'date'")
    assert error.to_payload() == {"error": "Invalid response format from AI"}
    assert error.status_code == 500

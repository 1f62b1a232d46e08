"""Unit tests for JSON extraction from oracle responses"""

from payment_intent_gateway.utils.json_tools import extract_json_object, strip_code_fences


def test_plain_json_object():
    assert extract_json_object('{"score": 10, "flags": []}') == {"score": 10, "flags": []}


def test_fenced_json_object():
    text = '```json\n{"recipientName": "John", "amount": 50}\n```'
    assert extract_json_object(text) == {"recipientName": "John", "amount": 50}


def test_bare_fence_without_language_tag():
    assert extract_json_object('```\n{"a": 1}\n```') == {"a": 1}


def test_object_surrounded_by_prose():
    text = 'Here is the analysis: {"riskLevel": "high", "nested": {"x": 1}} Hope this helps.'
    assert extract_json_object(text) == {"riskLevel": "high", "nested": {"x": 1}}


def test_braces_inside_strings_do_not_break_balancing():
    text = 'Result: {"reference": "invoice {42}", "note": "say \\"hi\\""}'
    result = extract_json_object(text)
    assert result["reference"] == "invoice {42}"
    assert result["note"] == 'say "hi"'


def test_empty_and_blank_text():
    assert extract_json_object("") is None
    assert extract_json_object("   \n") is None
    assert extract_json_object(None) is None


def test_no_json_returns_none():
    assert extract_json_object("I cannot help with that request.") is None


def test_array_payload_is_not_an_object():
    assert extract_json_object("[1, 2, 3]") is None


def test_invalid_json_returns_none():
    assert extract_json_object("{recipientName: John}") is None


def test_strip_code_fences_only_removes_markup():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('{"a": 1}') == '{"a": 1}'

import json

import pytest
import requests

from llm_sql_generator.config import DEFAULT_API_URL, DEFAULT_MODEL_NAME, SYSTEM_PROMPT_TEMPLATE
from llm_sql_generator.exceptions import LLMAPIError, ResponseFormatError, Txt2SqlError
from llm_sql_generator.llm import LLMHandler

from .helpers import FakeResponse, FakeSession, completion

SCHEMA = "users: id (int), name (varchar)"


def make_handler(response=None, error=None):
    session = FakeSession(response=response, error=error)
    return LLMHandler("sk-key", session=session), session


def test_defaults():
    handler = LLMHandler("sk-key", session=FakeSession())
    assert handler.api_uri == DEFAULT_API_URL
    assert handler.model_name == DEFAULT_MODEL_NAME


@pytest.mark.parametrize("kwargs, name", [
    ({"api_key": None}, "API key"),
    ({"api_key": "k", "api_uri": None}, "API URI"),
    ({"api_key": "k", "model_name": None}, "modelName"),
])
def test_none_arguments_are_rejected(kwargs, name):
    with pytest.raises(ValueError, match=f"{name} cannot be None"):
        LLMHandler(**kwargs)


def test_from_config():
    cfg = {"api": {"llm_api_uri": "https://llm.example.com/v1", "llm_api_key": "k", "llm_model_name": "m"}}
    handler = LLMHandler.from_config(cfg, session=FakeSession())
    assert handler.api_uri == "https://llm.example.com/v1/chat/completions"
    assert handler.api_key == "k"
    assert handler.model_name == "m"


def test_system_prompt_embeds_schema_and_rules():
    handler, _ = make_handler()
    prompt = handler.build_system_prompt(SCHEMA)
    assert prompt == handler.build_messages("q", SCHEMA)[0]["content"]
    assert SCHEMA in prompt
    assert "1. Output only the SQL statement" in prompt
    assert "7. Avoid SELECT *" in prompt


def test_build_request_body():
    handler, _ = make_handler()
    body = handler.build_request("how many users?", SCHEMA)
    assert body == {
        "model": DEFAULT_MODEL_NAME,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT_TEMPLATE.format(schema=SCHEMA)},
            {"role": "user", "content": "how many users?"},
        ],
        "temperature": 0.7,
        "max_tokens": 4096,
    }


def test_braces_in_inputs_are_kept_verbatim():
    handler, _ = make_handler()
    messages = handler.build_messages("find {name}", "t: data (json {a: 1})")
    assert "t: data (json {a: 1})" in messages[0]["content"]
    assert messages[1]["content"] == "find {name}"


def test_send_request_headers_and_timeout():
    handler, session = make_handler(FakeResponse(200, completion("SELECT 1")))
    payload = handler.build_request("q", SCHEMA)
    assert handler.send_request(payload) == completion("SELECT 1")

    call = session.calls[0]
    assert call["url"] == DEFAULT_API_URL
    assert call["json"] == payload
    assert call["headers"]["Authorization"] == "Bearer sk-key"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["timeout"] == (30.0, 60.0)


def test_send_request_non_200_raises():
    handler, _ = make_handler(FakeResponse(401, '{"error": "bad key"}'))
    with pytest.raises(LLMAPIError) as exc_info:
        handler.send_request({})
    assert exc_info.value.status_code == 401
    assert exc_info.value.body == '{"error": "bad key"}'
    assert str(exc_info.value) == 'API request failed with status: 401, body: {"error": "bad key"}'


def test_send_request_without_status_check():
    handler, _ = make_handler(FakeResponse(500, "oops"))
    assert handler.send_request({}, check_status=False) == "oops"


@pytest.mark.parametrize("text, expected", [
    ("SELECT 1", "SELECT 1"),
    ("  SELECT 1\n", "SELECT 1"),
    ("```sql\nSELECT name FROM users\n```", "SELECT name FROM users"),
    ("```\nSELECT 1\n```", "SELECT 1"),
    ("\n```sql SELECT 1;```  ", "SELECT 1;"),
    ("SELECT 1\n```", "SELECT 1"),
    ("```sql\nSELECT 1", "SELECT 1"),
])
def test_clean_sql_output(text, expected):
    assert LLMHandler.clean_sql_output(text) == expected


def test_extract_content():
    assert LLMHandler.extract_content(completion("SELECT 1")) == "SELECT 1"


@pytest.mark.parametrize("body, message", [
    ({"choices": []}, "No choices in API response"),
    ({"choices": {"a": 1}}, "No choices in API response"),
    ({"choices": 5}, "No choices in API response"),
    ([1, 2], "No choices in API response"),
    ({"choices": [5]}, "No message content in API response"),
    ({"choices": [{"message": {"content": 42}}]}, "No message content in API response"),
    ({}, "No choices in API response"),
    ({"choices": [{}]}, "No message content in API response"),
    ({"choices": [{"message": {"role": "assistant"}}]}, "No message content in API response"),
    ({"choices": [{"message": {"content": None}}]}, "No message content in API response"),
])
def test_extract_content_bad_structure(body, message):
    with pytest.raises(ResponseFormatError, match=message):
        LLMHandler.extract_content(json.dumps(body))


def test_generate_sql():
    handler, session = make_handler(FakeResponse(200, completion("```sql\nSELECT name FROM users;\n```")))
    assert handler.generate_sql("names?", SCHEMA) == "SELECT name FROM users;"
    assert session.calls[0]["json"]["messages"][1] == {"role": "user", "content": "names?"}


def test_generate_sql_wraps_api_error():
    handler, _ = make_handler(FakeResponse(503, "busy"))
    with pytest.raises(Txt2SqlError, match="Failed to convert text to SQL") as exc_info:
        handler.generate_sql("q", SCHEMA)
    assert isinstance(exc_info.value.__cause__, LLMAPIError)


def test_generate_sql_wraps_invalid_json():
    handler, _ = make_handler(FakeResponse(200, "not json"))
    with pytest.raises(Txt2SqlError) as exc_info:
        handler.generate_sql("q", SCHEMA)
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_generate_sql_wraps_transport_error():
    handler, _ = make_handler(error=requests.ConnectionError("refused"))
    with pytest.raises(Txt2SqlError) as exc_info:
        handler.generate_sql("q", SCHEMA)
    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


def test_generate_raw_returns_body_unchanged():
    body = completion("```sql\nSELECT 1\n```")
    handler, _ = make_handler(FakeResponse(200, body))
    assert handler.generate_raw("q", SCHEMA) == body


def test_generate_raw_does_not_check_status():
    handler, _ = make_handler(FakeResponse(429, '{"error": "rate limited"}'))
    assert handler.generate_raw("q", SCHEMA) == '{"error": "rate limited"}'


def test_generate_raw_wraps_transport_error():
    handler, _ = make_handler(error=requests.Timeout("slow"))
    with pytest.raises(Txt2SqlError) as exc_info:
        handler.generate_raw("q", SCHEMA)
    assert isinstance(exc_info.value.__cause__, requests.Timeout)


def test_generate_sql_wraps_non_list_choices():
    handler, _ = make_handler(FakeResponse(200, '{"choices": {"a": 1}}'))
    with pytest.raises(Txt2SqlError) as exc_info:
        handler.generate_sql("q", SCHEMA)
    assert isinstance(exc_info.value.__cause__, ResponseFormatError)

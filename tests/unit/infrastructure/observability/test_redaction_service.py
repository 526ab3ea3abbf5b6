from artifact_gate.infrastructure.observability.redaction_service import (
    redact_dict,
    redact_text,
)


def test_bearer_tokens_are_masked():
    assert redact_text("Authorization failed: Bearer abc.def") == "Authorization failed: Bearer [REDACTED]"


def test_rally_api_key_is_masked():
    text = redact_text("request with ZSESSIONID=_xyz123 rejected")
    assert "_xyz123" not in text
    assert "[REDACTED]" in text


def test_security_token_query_param_is_masked():
    text = redact_text("POST https://rally/slm/webservice/v2.0/defect/1?key=7f3e-99aa failed")
    assert "7f3e-99aa" not in text


def test_github_token_is_masked():
    assert "ghp_" not in redact_text("token ghp_abcdef123456")


def test_plain_text_is_untouched():
    assert redact_text("Rally: not found status=404") == "Rally: not found status=404"
    assert redact_text("") == ""


def test_sensitive_keys_are_masked_recursively():
    data = {"rally": {"api_key": "k", "server": "https://rally"}, "items": [{"password": "p"}]}

    assert redact_dict(data) == {
        "rally": {"api_key": "[REDACTED]", "server": "https://rally"},
        "items": [{"password": "[REDACTED]"}],
    }

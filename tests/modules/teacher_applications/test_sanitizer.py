"""
Unit tests for the teacher applications input sanitizer.
"""

import pytest

from teacher_panel.core.errors import InvalidArgumentError
from teacher_panel.modules.teacher_applications.sanitizer import (
    clean_string,
    sanitize_application_request,
    sanitize_approve_request,
)


def _approve_payload(**overrides):
    payload = {
        "applicationId": "A1",
        "email": "t@x.com",
        "tempPassword": "longenough1",
    }
    payload.update(overrides)
    return payload


class TestCleanString:
    """Tests for clean_string."""

    def test_trims_strings(self):
        assert clean_string("  hello \n") == "hello"

    @pytest.mark.parametrize("value", [None, 42, 3.5, True, ["a"], {"a": 1}])
    def test_non_strings_become_empty(self, value):
        assert clean_string(value) == ""


class TestSanitizeApplicationRequest:
    """Tests for sanitize_application_request (reject/delete)."""

    def test_returns_trimmed_application_id(self):
        request = sanitize_application_request({"applicationId": "  A1  "})
        assert request.application_id == "A1"

    @pytest.mark.parametrize(
        "payload",
        [{}, {"applicationId": ""}, {"applicationId": "   "}, {"applicationId": 123}, None, "A1"],
    )
    def test_missing_application_id_is_invalid(self, payload):
        with pytest.raises(InvalidArgumentError) as exc_info:
            sanitize_application_request(payload)
        assert exc_info.value.field == "applicationId"
        assert exc_info.value.error_code == "INVALID_ARGUMENT"


class TestSanitizeApproveRequest:
    """Tests for sanitize_approve_request."""

    def test_valid_payload(self):
        request = sanitize_approve_request(
            _approve_payload(
                email="  T@X.com ",
                fullName=" T One ",
                schoolName="Hill School",
                country="GH",
            )
        )
        assert request.application_id == "A1"
        assert request.email == "t@x.com"
        assert request.temp_password == "longenough1"
        assert request.full_name == "T One"
        assert request.school_name == "Hill School"
        assert request.country == "GH"
        assert request.force is False

    def test_optional_fields_default_to_empty(self):
        request = sanitize_approve_request(_approve_payload(fullName=None, country=7))
        assert request.full_name == ""
        assert request.school_name == ""
        assert request.country == ""

    def test_missing_application_id_is_reported_first(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            sanitize_approve_request({"email": "bad", "tempPassword": "x"})
        assert exc_info.value.field == "applicationId"

    @pytest.mark.parametrize("email", ["", "   ", "no-at-sign.com", None, 5])
    def test_invalid_email(self, email):
        with pytest.raises(InvalidArgumentError) as exc_info:
            sanitize_approve_request(_approve_payload(email=email))
        assert exc_info.value.field == "email"

    def test_password_of_seven_characters_is_invalid(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            sanitize_approve_request(_approve_payload(tempPassword="1234567"))
        assert exc_info.value.field == "tempPassword"
        assert "8" in exc_info.value.message

    def test_password_of_eight_characters_is_valid(self):
        request = sanitize_approve_request(_approve_payload(tempPassword="12345678"))
        assert request.temp_password == "12345678"

    def test_password_is_trimmed_before_length_check(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            sanitize_approve_request(_approve_payload(tempPassword="  1234567  "))
        assert exc_info.value.field == "tempPassword"

    def test_missing_password_is_invalid(self):
        payload = _approve_payload()
        del payload["tempPassword"]
        with pytest.raises(InvalidArgumentError) as exc_info:
            sanitize_approve_request(payload)
        assert exc_info.value.field == "tempPassword"

    @pytest.mark.parametrize("force,expected", [(True, True), ("true", False), (1, False)])
    def test_force_only_accepts_boolean_true(self, force, expected):
        request = sanitize_approve_request(_approve_payload(force=force))
        assert request.force is expected

    def test_password_is_hidden_from_repr(self):
        request = sanitize_approve_request(_approve_payload())
        assert "longenough1" not in repr(request)

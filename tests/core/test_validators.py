"""
Test suite for input validators.

System role: Verification of request validation helpers
"""

import uuid

import pytest

from newsbot.core.exceptions import ValidationError
from newsbot.core.validators import is_valid_session_id, validate_message_text


class TestIsValidSessionId:
    def test_accepts_uuid4(self):
        assert is_valid_session_id(str(uuid.uuid4()))

    @pytest.mark.parametrize("value", ["", "abc", "123e4567-e89b-62d3-a456-426614174000", None, 123])
    def test_rejects_other_values(self, value):
        assert not is_valid_session_id(value)


class TestValidateMessageText:
    def test_trims(self):
        assert validate_message_text("  hello  ") == "hello"

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_message_text(value)

        assert exc_info.value.message == "Message cannot be empty"
        assert exc_info.value.details["field"] == "message"

    def test_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_message_text("x" * 11, max_length=10)

        assert exc_info.value.message == "Message too long (max 10 characters)"

    def test_length_checked_after_trim(self):
        assert validate_message_text(" " + "x" * 10 + " ", max_length=10) == "x" * 10

"""
Input validators shared by the HTTP routes and the WebSocket channel.

Dependencies: newsbot.core.exceptions
System role: Request validation helpers
"""

import re

from newsbot.core.exceptions import ValidationError

SESSION_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_valid_session_id(value: object) -> bool:
    """True if ``value`` is a canonical UUID string."""
    return isinstance(value, str) and SESSION_ID_PATTERN.match(value) is not None


def validate_message_text(text: object, max_length: int = 1000) -> str:
    """
    Trim and check a chat message.

    Args:
        text: Raw message value from the client
        max_length: Maximum length after trimming

    Returns:
        str: Trimmed message

    Raises:
        ValidationError: With a user-facing message if the text is empty or too long
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Message cannot be empty", field="message")
    message = text.strip()
    if len(message) > max_length:
        raise ValidationError(f"Message too long (max {max_length} characters)", field="message")
    return message

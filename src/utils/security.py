import re
from typing import Optional
import structlog

logger = structlog.get_logger()


class InputValidation:
    """Security pattern checks for user-supplied search queries"""

    # SQL injection patterns to detect and block
    SQL_INJECTION_PATTERNS = [
        r"(\b(SELECT|INSERT|UPDATE|DELETE|DROP|CREATE|ALTER|EXEC|EXECUTE|UNION|DECLARE|CAST)\b)",
        r"(--|;|\/\*|\*\/|xp_|sp_)",
        r"('(\s|%20)*(or|OR)(\s|%20)*')",
        r"(\bor\b.*=.*)",
    ]

    # Script tags and other XSS vectors
    XSS_PATTERNS = [
        r"<script",
        r"javascript:",
        r"onerror",
        r"onload",
        r"onclick",
        r"<iframe",
        r"<embed",
        r"<object",
        r"eval\s*\(",
        r"expression\s*\(",
    ]

    # Letters, digits, whitespace and basic punctuation
    ALLOWED_CHARS = re.compile(r"^[a-zA-Z0-9\s.,!?'\-#]+$")

    @classmethod
    def find_sql_injection(cls, value: str) -> Optional[str]:
        """Return the first matching SQL injection pattern, if any"""
        for pattern in cls.SQL_INJECTION_PATTERNS:
            if re.search(pattern, value, re.IGNORECASE):
                logger.warning(
                    "input_validation_failed",
                    pattern=pattern,
                    reason="Potential SQL injection",
                )
                return pattern
        return None

    @classmethod
    def contains_xss(cls, value: str) -> bool:
        """Check for script injection vectors"""
        for pattern in cls.XSS_PATTERNS:
            if re.search(pattern, value, re.IGNORECASE):
                logger.warning(
                    "input_validation_failed",
                    pattern=pattern,
                    reason="Potential XSS",
                )
                return True
        return False

    @classmethod
    def has_only_allowed_chars(cls, value: str) -> bool:
        """Enforce the character whitelist"""
        if cls.ALLOWED_CHARS.match(value):
            return True

        for char in value:
            if not cls.ALLOWED_CHARS.match(char):
                logger.warning("invalid_char_detected", char=char)
                break
        return False

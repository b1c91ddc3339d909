"""Domain errors raised by the settings services.

Each error carries an English message, its Arabic counterpart and the HTTP
status the API answers with. Routes never build error bodies themselves;
the handlers registered in ``src.main`` render every error as::

    {"statusCode": 409, "message": "...", "messageAr": "..."}
"""

from __future__ import annotations

from typing import Optional

# Fallback translations for messages raised without an explicit Arabic text
TRANSLATIONS = {
    "Unauthorized": "غير مصرح",
    "Forbidden": "محظور",
    "Insufficient permissions": "صلاحيات غير كافية",
    "Bad Request": "طلب خاطئ",
    "Not Found": "غير موجود",
    "Conflict": "تعارض",
    "Internal Server Error": "خطأ في الخادم",
}
DEFAULT_MESSAGE_AR = "حدث خطأ"


def translate(message: str) -> str:
    """Arabic text for a known English message."""
    return TRANSLATIONS.get(message, DEFAULT_MESSAGE_AR)


class SettingsError(Exception):
    """Base class for errors the API reports to the caller."""

    status_code = 500

    def __init__(self, message: str, message_ar: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.message_ar = message_ar or translate(message)

    def to_dict(self) -> dict:
        return {
            "statusCode": self.status_code,
            "message": self.message,
            "messageAr": self.message_ar,
        }


class NotFoundError(SettingsError):
    """Requested entity or key does not exist."""

    status_code = 404


class ConflictError(SettingsError):
    """Natural key collision or overlapping range."""

    status_code = 409


class BadRequestError(SettingsError):
    """Invalid input: broken reference, bad range, guarded row, rule mismatch."""

    status_code = 400

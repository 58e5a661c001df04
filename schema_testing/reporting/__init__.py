"""Report attachments for failed schema action assertions."""

from .allure_helpers import attach_json, attach_text

__all__ = ["attach_json", "attach_text"]

"""State of the upload page for one browser session.

`static/upload.js` keeps the same fields and events client-side; the
server-rendered form post drives this class so both paths render alike.
"""

from dataclasses import dataclass
from typing import Any

VALIDATION_MESSAGE = "Please select an image file first."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."
MISSING_LABEL = "N/A"


def format_confidence(value: Any) -> str | None:
    """Render a [0, 1] score as a percentage with two decimals, e.g. 95.40%."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return f"{value * 100:.2f}%"


@dataclass
class UploadViewState:
    filename: str | None = None
    preview_url: str | None = None
    result: Any = None
    error: str | None = None
    is_loading: bool = False

    def select_file(self, filename: str | None, preview_url: str | None = None) -> None:
        # A new selection always drops the previous outcome
        self.result = None
        self.error = None
        self.filename = filename or None
        self.preview_url = preview_url if self.filename else None

    def start_submit(self) -> bool:
        """Begin a submission. Returns False when nothing should be sent."""
        if self.filename is None:
            self.error = VALIDATION_MESSAGE
            return False
        if self.is_loading:
            return False

        self.is_loading = True
        self.result = None
        self.error = None
        return True

    def resolve(self, result: Any) -> None:
        self.is_loading = False
        self.result = result

    def reject(self, message: str | None) -> None:
        self.is_loading = False
        self.result = None
        self.error = message or UNKNOWN_ERROR_MESSAGE

    @property
    def prediction(self) -> str:
        if isinstance(self.result, dict) and self.result.get("prediction"):
            return str(self.result["prediction"])
        return MISSING_LABEL

    @property
    def confidence(self) -> str | None:
        if isinstance(self.result, dict):
            return format_confidence(self.result.get("confidence"))
        return None

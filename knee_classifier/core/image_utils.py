"""
Image utilities for building browser previews of uploaded X-rays.

Usage:
    from knee_classifier.core.image_utils import upload_preview_uri

    preview = upload_preview_uri(content, "knee.png", "image/png")
"""

import base64
from pathlib import Path

# Supported image MIME types
IMAGE_MIME_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def get_mime_type(filename: str | Path) -> str | None:
    """Get MIME type for a file based on extension.

    Args:
        filename: Name or path of the file

    Returns:
        MIME type string or None if not a supported image type
    """
    ext = Path(filename).suffix.lower()
    return IMAGE_MIME_TYPES.get(ext)


def bytes_to_base64_data_uri(data: bytes, mime_type: str) -> str:
    """Convert raw bytes to a base64 data URI.

    Args:
        data: Raw image bytes
        mime_type: MIME type (e.g., "image/png")

    Returns:
        Data URI string: "data:{mime_type};base64,{encoded_data}"
    """
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def upload_preview_uri(
    data: bytes,
    filename: str | None,
    content_type: str | None = None,
) -> str | None:
    """Build a data URI the upload page can display as a preview.

    The declared content type wins when it is an image type; otherwise the
    type is guessed from the filename extension. Empty uploads have no preview.
    """
    if not data:
        return None

    mime_type = content_type if content_type and content_type.startswith("image/") else None
    if mime_type is None and filename:
        mime_type = get_mime_type(filename)

    return bytes_to_base64_data_uri(data, mime_type or DEFAULT_MIME_TYPE)

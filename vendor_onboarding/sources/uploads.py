"""
Upload validation shared by the file-based sources.
"""

from ..exceptions import InputValidationError

MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB


def validate_upload_size(size: int, label: str = "File") -> None:
    """
    Reject empty and oversized uploads.

    Raises:
        InputValidationError: If size is 0 or above MAX_UPLOAD_BYTES
    """
    if size <= 0:
        raise InputValidationError(f"{label} is empty", field="file")
    if size > MAX_UPLOAD_BYTES:
        raise InputValidationError(f"{label} size must be less than 10MB", field="file")

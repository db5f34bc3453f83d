"""Object key generation for uploaded post images."""

from pathlib import PurePosixPath

from core.utils.constants import IMAGE_FORM_FIELD, IMAGE_KEY_PREFIX
from core.utils.time import utc_now_millis


def file_extension(filename: str | None) -> str:
    """Return the final suffix of ``filename`` including the dot, or ``""``.

    Dotfiles such as ``.bashrc`` have no extension.
    """
    if not filename:
        return ""
    return PurePosixPath(filename.replace("\\", "/")).suffix


def build_image_key(
    filename: str | None,
    *,
    field_name: str = IMAGE_FORM_FIELD,
    timestamp_ms: int | None = None,
) -> str:
    """Build ``Images/<field>_<timestamp><extension>`` for a new upload.

    Args:
        filename: Original client file name, used only for its extension
        field_name: Multipart field the file arrived in
        timestamp_ms: Creation time in epoch milliseconds (defaults to now)

    Returns:
        Object key; two uploads in the same millisecond with the same
        extension share a key
    """
    stamp = utc_now_millis() if timestamp_ms is None else timestamp_ms
    return f"{IMAGE_KEY_PREFIX}{field_name}_{stamp}{file_extension(filename)}"

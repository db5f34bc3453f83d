from pathlib import PurePosixPath

from core.utils.constants import DEFAULT_IMAGE_CONTENT_TYPE, EXTENSION_MIME_TYPE_MAP


def guess_content_type(filename: str, declared: str | None = None) -> str:
    """Pick the Content-Type an image object is stored with.

    The type declared by the client wins; otherwise it is inferred from the
    file extension, falling back to a generic binary type.
    """
    if declared and declared.strip():
        return declared.strip()

    suffix = PurePosixPath(filename).suffix.lower().lstrip(".")
    return EXTENSION_MIME_TYPE_MAP.get(suffix, DEFAULT_IMAGE_CONTENT_TYPE)

"""Parsing of multipart/form-data bodies delivered by API Gateway."""

import base64
import binascii
from dataclasses import dataclass, field
from io import BytesIO
from typing import Any

from aws_lambda_powertools import Logger
from python_multipart import parse_form
from python_multipart.exceptions import FormParserError

from core.models.errors import ValidationError
from core.models.post import ImageUpload
from core.utils.constants import ERROR_CODE_INVALID_FORM

logger = Logger(UTC=True)


@dataclass
class ParsedForm:
    """Text fields and file parts of a submitted form."""

    fields: dict[str, str] = field(default_factory=dict)
    files: dict[str, ImageUpload] = field(default_factory=dict)


def _decode(value: bytes | str | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def header_value(headers: dict[str, Any] | None, name: str) -> str | None:
    """Case-insensitive header lookup."""
    wanted = name.lower()
    for key, value in (headers or {}).items():
        if key.lower() == wanted:
            return value
    return None


def event_body_bytes(event: dict[str, Any]) -> bytes:
    """Return the raw request body of an API Gateway proxy event.

    Raises:
        ValidationError: If a base64-flagged body does not decode
    """
    body = event.get("body") or ""

    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError(
                message="Invalid form data",
                error_code=ERROR_CODE_INVALID_FORM,
                details={"reason": "body is not valid base64"},
            ) from exc

    if isinstance(body, bytes):
        return body
    return body.encode("utf-8")


def parse_form_data(*, content_type: str | None, body: bytes) -> ParsedForm:
    """Parse a multipart or urlencoded form body.

    Parts sent with a filename become ``ImageUpload`` entries keyed by field
    name; other parts become text fields. When a name repeats, the last
    part wins.

    Raises:
        ValidationError: If the body cannot be parsed as a form
    """
    if not content_type:
        raise ValidationError(
            message="Invalid form data",
            error_code=ERROR_CODE_INVALID_FORM,
            details={"reason": "missing Content-Type header"},
        )

    form = ParsedForm()
    file_objects: list[Any] = []

    def on_field(part: Any) -> None:
        name = _decode(part.field_name)
        if name:
            form.fields[name] = _decode(part.value) or ""

    def on_file(part: Any) -> None:
        file_objects.append(part)
        name = _decode(part.field_name)
        if not name:
            return

        stream = part.file_object
        stream.seek(0)
        form.files[name] = ImageUpload(
            data=stream.read(),
            filename=_decode(part.file_name) or None,
            field_name=name,
        )

    headers = {
        "Content-Type": content_type,
        "Content-Length": str(len(body)),
    }

    try:
        parse_form(headers, BytesIO(body), on_field, on_file)
    except FormParserError as exc:
        logger.warning("Malformed form body", extra={"content_type": content_type, "error": str(exc)})
        raise ValidationError(
            message="Invalid form data",
            error_code=ERROR_CODE_INVALID_FORM,
            details={"reason": "body could not be parsed"},
        ) from exc
    finally:
        for part in file_objects:
            part.close()

    logger.debug(
        "Form parsed",
        extra={"fields": sorted(form.fields), "files": sorted(form.files)},
    )
    return form

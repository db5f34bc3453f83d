"""
Lambda handler responsible for composing a post with its image.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.result import Err
from core.services.factory import create_post_lifecycle_manager
from core.utils.constants import FORM_FIELD_CONTENT, FORM_FIELD_TITLE, IMAGE_FORM_FIELD
from core.utils.decorators import api_gateway_handler
from core.utils.multipart import event_body_bytes, header_value, parse_form_data
from core.utils.response import ResponseBuilder, error_response

from .models import ComposePostRequest, ComposePostResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``POST /compose`` requests.

    Expected API Gateway event structure:
    {
        "headers": {"Content-Type": "multipart/form-data; boundary=..."},
        "body": "<base64 multipart body>",
        "isBase64Encoded": true
    }

    The form carries the image under ``file`` and optional ``postTitle`` and
    ``postContent`` text fields. A form without an image is rejected.

    Args:
        event: API Gateway Lambda proxy event containing the form
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response containing the created post
    """
    request_id = getattr(context, "aws_request_id", None)
    content_type = header_value(event.get("headers"), "Content-Type")

    logger.info(
        "Received compose request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "content_type": content_type,
            "request_id": request_id,
        },
    )

    # malformed bodies raise ValidationError, mapped to 400 by the decorator
    form = parse_form_data(content_type=content_type, body=event_body_bytes(event))

    request = ComposePostRequest(
        title=form.fields.get(FORM_FIELD_TITLE),
        content=form.fields.get(FORM_FIELD_CONTENT),
    )

    manager = create_post_lifecycle_manager()
    result = manager.compose_post(
        title=request.title,
        content=request.content,
        image=form.files.get(IMAGE_FORM_FIELD),
    )

    if isinstance(result, Err):
        return error_response(result, request_id=request_id)

    return ResponseBuilder.created(ComposePostResponse.from_post(result.value).model_dump())

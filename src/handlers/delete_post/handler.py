"""
Lambda handler responsible for deleting a post and its image.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.result import Err
from core.services.factory import create_post_lifecycle_manager
from core.utils.constants import DELETE_CONFIRMATION_MESSAGE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder, error_response
from core.utils.validators import validate_request

from .models import DeletePostRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``DELETE /posts/{postID}`` requests.

    This function:
    - Extracts the post identifier from API Gateway path parameters
    - Removes the image, then the post record
    - Replies with a plain-text confirmation

    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway-compatible response dictionary.
    """
    request_id = getattr(context, "aws_request_id", None)
    path_params = event.get("pathParameters") or {}

    logger.info(
        "Received delete post request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
        },
    )

    is_valid, request = validate_request(
        DeletePostRequest,
        {"post_id": path_params.get("postID")},
        request_id=request_id,
    )
    if not is_valid:
        return request

    manager = create_post_lifecycle_manager()
    result = manager.delete_post(request.post_id)

    if isinstance(result, Err):
        return error_response(result, request_id=request_id)

    return ResponseBuilder.text(DELETE_CONFIRMATION_MESSAGE)

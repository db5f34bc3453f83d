"""
Lambda handler responsible for listing posts.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.result import Err
from core.services.factory import create_post_lifecycle_manager
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder, error_response

from .models import ListPostsResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``GET /`` requests.

    Returns a JSON array of posts. A post whose image URL could not be
    signed is still listed, with ``image_url`` set to null.

    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway-compatible response dictionary.
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received list posts request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
        },
    )

    manager = create_post_lifecycle_manager()
    result = manager.list_posts()

    if isinstance(result, Err):
        return error_response(result, request_id=request_id)

    return ResponseBuilder.ok(ListPostsResponse(posts=result.value).to_body())

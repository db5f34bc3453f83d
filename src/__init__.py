"""Post Image Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Serverless blog post service with images using AWS Lambda, S3, and DynamoDB"
)

__all__ = ["handlers", "core"]

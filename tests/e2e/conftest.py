"""
Fixtures for end-to-end tests against a deployed stack.

Set E2E_BASE_URL to the API root (for example http://localhost:3001), or
leave it unset to discover the REST API in LocalStack. Tests are skipped
when neither is reachable.
"""

import base64
import logging
import os

import boto3
import pytest
import requests
from botocore.config import Config

from e2e_api_client import E2EAPIClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

ENDPOINT_BASE_URL = os.getenv("E2E_LOCALSTACK_URL", "http://localhost:4566")
API_NAME_FRAGMENT = "post"
STAGE = os.getenv("E2E_STAGE", "snd")

FAST_FAIL = Config(connect_timeout=2, read_timeout=5, retries={"max_attempts": 1})


def _discover_endpoint() -> str:
    apigateway = boto3.client("apigateway", endpoint_url=ENDPOINT_BASE_URL, config=FAST_FAIL)
    apis = apigateway.get_rest_apis()
    api = next(api for api in apis["items"] if API_NAME_FRAGMENT in api["name"])
    return f"{ENDPOINT_BASE_URL}/restapis/{api['id']}/{STAGE}/_user_request_"


@pytest.fixture(scope="session")
def api_endpoint():
    """Base URL of the deployed API."""
    endpoint = os.getenv("E2E_BASE_URL")

    try:
        if not endpoint:
            endpoint = _discover_endpoint()
        requests.get(f"{endpoint.rstrip('/')}/", timeout=5)
    except Exception as e:
        logger.warning("No deployed API reachable: %s", e)
        pytest.skip(f"No deployed API reachable: {e}")

    return endpoint


@pytest.fixture
def api_client(api_endpoint):
    """HTTP client wrapper for E2E API testing"""
    return E2EAPIClient(api_endpoint)


@pytest.fixture
def created_posts(api_client):
    """Collects post ids created by a test and deletes leftovers afterwards."""
    post_ids: list[str] = []
    yield post_ids

    for post_id in post_ids:
        response = api_client.delete(f"/posts/{post_id}")
        if response.status_code not in (200, 404):
            logger.warning("Cleanup of %s returned %s", post_id, response.status_code)


SAMPLE_PNG_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="


@pytest.fixture
def sample_png() -> tuple[str, bytes, str]:
    return ("e2e.png", base64.b64decode(SAMPLE_PNG_BASE64), "image/png")

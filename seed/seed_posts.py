#!/usr/bin/env python3
"""
Seed script to populate the system via API endpoints.

Run:
    python seed/seed_posts.py --base-url http://localhost:3001 --limit 3
"""

import argparse
import base64
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

from core.utils.constants import (
    DEFAULT_LOCAL_BASE_URL,
    FORM_FIELD_CONTENT,
    FORM_FIELD_TITLE,
    IMAGE_FORM_FIELD,
)

logger = Logger(service="seed")

# 1x1 transparent PNG
SAMPLE_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)

SEED_POSTS: list[dict[str, str]] = [
    {"title": "Hello", "content": "World", "filename": "hello.png"},
    {"title": "Morning light", "content": "First coffee on the balcony.", "filename": "morning.png"},
    {"title": "Trail notes", "content": "Six miles, two waterfalls.", "filename": "trail.png"},
    {"title": "Kitchen log", "content": "Sourdough attempt number four.", "filename": "bread.png"},
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed posts via the post API")

    parser.add_argument(
        "--base-url",
        default=DEFAULT_LOCAL_BASE_URL,
        help="API root, e.g. http://localhost:3001",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=len(SEED_POSTS),
        help="Number of posts to seed",
    )

    return parser.parse_args()


def seed_posts() -> None:
    try:
        args = parse_args()
        base_url = args.base_url.rstrip("/")

        logger.info("Starting seeding process", extra={"api_base_url": base_url})

        for item in SEED_POSTS[: args.limit]:
            response = requests.post(
                f"{base_url}/compose",
                data={
                    FORM_FIELD_TITLE: item["title"],
                    FORM_FIELD_CONTENT: item["content"],
                },
                files={IMAGE_FORM_FIELD: (item["filename"], SAMPLE_PNG, "image/png")},
                timeout=30,
            )

            if response.status_code == 201:
                response_json = cast(dict[str, Any], response.json())
                logger.info(
                    "Seeded post",
                    extra={"title": item["title"], "post_id": response_json.get("post_id")},
                )
            else:
                logger.error(
                    "Failed to seed post",
                    extra={
                        "title": item["title"],
                        "status": response.status_code,
                        "response": response.text,
                    },
                )

        logger.info("Seeding completed")

        list_response = requests.get(f"{base_url}/", timeout=30)
        logger.info(
            "List posts response",
            extra={
                "status": list_response.status_code,
                "count": len(list_response.json()) if list_response.ok else None,
            },
        )

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_posts()

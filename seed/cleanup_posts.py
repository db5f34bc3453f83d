#!/usr/bin/env python3
"""
Cleanup script to remove seeded posts via API endpoints.

Run:
    python seed/cleanup_posts.py --base-url http://localhost:3001
    python seed/cleanup_posts.py --all
"""

import argparse
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

from core.utils.constants import DEFAULT_LOCAL_BASE_URL

logger = Logger(service="cleanup")

SEED_TITLES = frozenset({"Hello", "Morning light", "Trail notes", "Kitchen log"})


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cleanup seeded posts via the post API")

    parser.add_argument(
        "--base-url",
        default=DEFAULT_LOCAL_BASE_URL,
        help="API root, e.g. http://localhost:3001",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Delete every post, not only the seeded ones",
    )

    return parser.parse_args()


def cleanup_posts() -> None:
    try:
        args = parse_args()
        base_url = args.base_url.rstrip("/")

        logger.info(
            "Starting cleanup process",
            extra={"api_base_url": base_url, "delete_all": args.all},
        )

        response = requests.get(f"{base_url}/", timeout=30)
        response.raise_for_status()
        posts = cast(list[dict[str, Any]], response.json())

        targets = [post for post in posts if args.all or post.get("title") in SEED_TITLES]
        deleted = 0

        for post in targets:
            delete_response = requests.delete(f"{base_url}/posts/{post['post_id']}", timeout=30)

            if delete_response.status_code in (200, 404):
                deleted += 1
                logger.info("Deleted post", extra={"post_id": post["post_id"]})
            else:
                logger.error(
                    "Failed to delete post",
                    extra={
                        "post_id": post["post_id"],
                        "status": delete_response.status_code,
                        "response": delete_response.text,
                    },
                )

        logger.info("Cleanup completed", extra={"deleted": deleted, "matched": len(targets)})

    except Exception as exc:
        logger.exception("Cleanup failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    cleanup_posts()

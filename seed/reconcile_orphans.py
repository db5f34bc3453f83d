#!/usr/bin/env python3
"""
Report (and optionally remove) images and posts that fell out of sync.

Reads POST_IMAGES_BUCKET_NAME, POSTS_TABLE_NAME and, for LocalStack,
AWS_ENDPOINT_URL from the environment.

Run:
    python seed/reconcile_orphans.py
    python seed/reconcile_orphans.py --remove-orphan-objects
"""

import argparse
import json
import sys

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_posts import DynamoDBPostRepository
from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.services.reconciliation import OrphanReconciler
from core.utils.constants import IMAGE_KEY_PREFIX

logger = Logger(service="reconcile")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find orphaned post images and records")

    parser.add_argument(
        "--remove-orphan-objects",
        action="store_true",
        help="Delete stored images no post references",
    )
    parser.add_argument(
        "--prefix",
        default=IMAGE_KEY_PREFIX,
        help="Key prefix holding post images",
    )

    return parser.parse_args()


def reconcile() -> None:
    try:
        args = parse_args()

        reconciler = OrphanReconciler(
            storage=S3ImageStorage(),
            repository=DynamoDBPostRepository(),
            prefix=args.prefix,
        )
        report = reconciler.sweep(remove_orphan_objects=args.remove_orphan_objects)

    except Exception as exc:
        logger.exception("Reconciliation failed", exc_info=exc)
        sys.exit(1)

    print(json.dumps(report.as_dict(), indent=2))

    if report.failed_removals:
        sys.exit(2)


if __name__ == "__main__":
    reconcile()

"""Operator-run sweep for posts and images that fell out of sync.

Compose and delete never roll back a completed step, so two kinds of orphans
can accumulate:

- orphan objects: stored images no post references
- orphan records: posts whose image key resolves to nothing

The sweep reports both. Orphan objects can optionally be removed; orphan
records are only reported because deleting a post is a product decision.
An image uploaded by a compose request that has not yet created its post looks
like an orphan object, so removal should run while no composes are in flight.
"""

from dataclasses import dataclass, field

from aws_lambda_powertools import Logger

from core.repositories.post_repository import PostRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import IMAGE_KEY_PREFIX

logger = Logger(UTC=True)


@dataclass
class ReconciliationReport:
    """Outcome of a single sweep."""

    scanned_posts: int = 0
    scanned_objects: int = 0
    orphan_objects: list[str] = field(default_factory=list)
    orphan_records: list[str] = field(default_factory=list)
    removed_objects: list[str] = field(default_factory=list)
    failed_removals: list[str] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return not self.orphan_objects and not self.orphan_records

    def as_dict(self) -> dict[str, object]:
        return {
            "scanned_posts": self.scanned_posts,
            "scanned_objects": self.scanned_objects,
            "orphan_objects": self.orphan_objects,
            "orphan_records": self.orphan_records,
            "removed_objects": self.removed_objects,
            "failed_removals": self.failed_removals,
            "is_consistent": self.is_consistent,
        }


class OrphanReconciler:
    """Compare stored images against post records."""

    def __init__(
        self,
        *,
        storage: ImageStorageRepository,
        repository: PostRepository,
        prefix: str = IMAGE_KEY_PREFIX,
    ) -> None:
        self.storage = storage
        self.repository = repository
        self.prefix = prefix

    def sweep(self, *, remove_orphan_objects: bool = False) -> ReconciliationReport:
        """Find orphans and optionally delete orphan objects.

        Raises:
            RepositoryError: If posts cannot be listed
            StorageError: If stored images cannot be listed
        """
        posts = self.repository.list_posts()
        keys = self.storage.list_image_keys(prefix=self.prefix)

        report = ReconciliationReport(scanned_posts=len(posts), scanned_objects=len(keys))

        stored = set(keys)
        referenced = {post.image_key for post in posts}

        report.orphan_objects = sorted(stored - referenced)
        for key in report.orphan_objects:
            logger.warning("Orphan object found", extra={"image_key": key, "orphan": "object"})

        for post in posts:
            if not self._resolves(post.image_key, stored):
                report.orphan_records.append(post.post_id)
                logger.warning(
                    "Orphan record found",
                    extra={"post_id": post.post_id, "image_key": post.image_key, "orphan": "record"},
                )

        if remove_orphan_objects:
            for key in report.orphan_objects:
                try:
                    self.storage.remove_image(key=key)
                    report.removed_objects.append(key)
                except Exception:
                    logger.exception("Failed to remove orphan object", extra={"image_key": key})
                    report.failed_removals.append(key)

        logger.info("Reconciliation sweep finished", extra=report.as_dict())
        return report

    def _resolves(self, key: str, stored: set[str]) -> bool:
        # keys outside the listed prefix need an explicit lookup
        if key.startswith(self.prefix):
            return key in stored
        return self.storage.image_exists(key=key)

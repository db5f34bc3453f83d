"""Shared post models."""

from dataclasses import dataclass

from pydantic import BaseModel, Field, StrictStr

from core.utils.constants import IMAGE_FORM_FIELD


class Post(BaseModel):
    """A persisted blog post and the object key of its image."""

    post_id: StrictStr = Field(..., min_length=1, description="Unique post identifier")
    title: StrictStr | None = Field(None, description="Optional post title")
    content: StrictStr | None = Field(None, description="Optional post body")
    image_key: StrictStr = Field(
        ...,
        min_length=1,
        description="Object storage key of the post image (internal only)",
    )
    created_at: StrictStr = Field(..., description="ISO-8601 creation timestamp (UTC)")


class PostView(BaseModel):
    """A post as returned to callers, with a short-lived image URL."""

    post_id: StrictStr = Field(..., description="Unique post identifier")
    title: StrictStr | None = Field(None, description="Post title")
    content: StrictStr | None = Field(None, description="Post body")
    created_at: StrictStr = Field(..., description="ISO-8601 creation timestamp (UTC)")
    image_url: StrictStr | None = Field(
        None,
        description="Signed, expiring image URL; null when it could not be minted",
    )

    @classmethod
    def from_post(cls, post: Post, *, image_url: str | None) -> "PostView":
        return cls(
            post_id=post.post_id,
            title=post.title,
            content=post.content,
            created_at=post.created_at,
            image_url=image_url,
        )


@dataclass(frozen=True)
class ImageUpload:
    """An image payload received with a compose request."""

    data: bytes
    filename: str | None = None
    content_type: str | None = None
    field_name: str = IMAGE_FORM_FIELD

    @property
    def size(self) -> int:
        return len(self.data)

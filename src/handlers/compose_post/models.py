from pydantic import BaseModel, Field, StrictStr

from core.models.post import Post


class ComposePostRequest(BaseModel):
    """Text fields of a compose form; both are optional."""

    title: StrictStr | None = Field(None, description="Value of the postTitle field")
    content: StrictStr | None = Field(None, description="Value of the postContent field")


class ComposePostResponse(BaseModel):
    """Created post; the image is only reachable through later reads."""

    post_id: str
    title: str | None = None
    content: str | None = None
    created_at: str

    @classmethod
    def from_post(cls, post: Post) -> "ComposePostResponse":
        return cls(
            post_id=post.post_id,
            title=post.title,
            content=post.content,
            created_at=post.created_at,
        )

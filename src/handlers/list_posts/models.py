from pydantic import BaseModel, Field

from core.models.post import PostView


class ListPostsResponse(BaseModel):
    """Every post, oldest first, each with its image URL (or null)."""

    posts: list[PostView] = Field(default_factory=list)

    def to_body(self) -> list[dict[str, object]]:
        return [post.model_dump() for post in self.posts]

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class DeletePostRequest(BaseModel):
    """Validation model for delete post request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    post_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Post ID to delete",
    )

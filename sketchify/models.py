from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DesignItem(BaseModel):
    """A project record; drafts may carry extra caller metadata and path fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: Optional[str] = None
    name: Optional[str] = None
    source_image: Optional[str] = None
    rendered_image: Optional[str] = None
    timestamp: Optional[int] = Field(None, description="Creation time in epoch millis")
    owner_id: Optional[str] = None

    # Derived path fields, dropped from the finalized record
    source_path: Optional[str] = Field(None, exclude=True)
    rendered_path: Optional[str] = Field(None, exclude=True)
    public_path: Optional[str] = Field(None, exclude=True)


class RenderRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    source_image: str


class RenderResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rendered_image: str
    rendered_path: Optional[str] = None


class UploadResponse(BaseModel):
    success: bool
    name: str
    mime_type: str
    size: int
    inline_image: str

"""Photo response schema."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class PhotoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    folder_id: Optional[str] = None
    storage_path: str
    caption: str = ""
    content_type: Optional[str] = None
    size_bytes: Optional[int] = None
    created_at: Optional[datetime] = None

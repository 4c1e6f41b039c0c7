"""Folder request and response schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class FolderCreate(BaseModel):
    """Body of ``POST /api/folders``. ``secret`` is accepted as an alias of ``password``."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., max_length=255)
    password: Optional[str] = Field(
        None, validation_alias=AliasChoices("password", "secret"), max_length=72
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please provide a folder name")
        return v


class FolderVerifyRequest(BaseModel):
    """Body of ``POST /api/folders/{id}/verify``."""

    model_config = ConfigDict(extra="forbid")

    password: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("password", "secret")
    )


class FolderDeleteRequest(BaseModel):
    """Optional body of ``DELETE /api/folders/{id}``."""

    model_config = ConfigDict(extra="forbid")

    password: Optional[str] = Field(None, validation_alias=AliasChoices("password", "secret"))


class FolderResponse(BaseModel):
    """Public view of a folder. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    name: str
    is_protected: bool
    photo_count: int = 0
    created_at: Optional[datetime] = None


WatermarkPosition = Literal[
    "center", "north", "south", "east", "west",
    "north_east", "north_west", "south_east", "south_west",
]


class WatermarkSettings(BaseModel):
    enabled: bool = False
    text: str = "COPYRIGHT"
    opacity: int = Field(50, ge=0, le=100)
    position: WatermarkPosition = "center"
    font_size: int = Field(80, ge=40, le=200)


class WatermarkUpdate(BaseModel):
    """Partial watermark change; omitted fields keep their current value."""

    model_config = ConfigDict(extra="forbid")

    enabled: Optional[bool] = None
    text: Optional[str] = Field(None, min_length=1, max_length=100)
    opacity: Optional[int] = Field(None, ge=0, le=100)
    position: Optional[WatermarkPosition] = None
    font_size: Optional[int] = Field(None, ge=40, le=200)


class FolderSettingsUpdate(BaseModel):
    """Body of ``PUT /api/folders/{id}/settings``. Every field is optional."""

    model_config = ConfigDict(extra="forbid")

    watermark_settings: Optional[WatermarkUpdate] = None
    allow_download: Optional[bool] = None
    allow_client_selection: Optional[bool] = None


class FolderSettingsResponse(BaseModel):
    watermark_settings: WatermarkSettings
    allow_download: bool
    allow_client_selection: bool
    download_count: int = 0

    @classmethod
    def from_folder(cls, folder) -> "FolderSettingsResponse":
        return cls(
            watermark_settings=WatermarkSettings(
                enabled=folder.watermark_enabled,
                text=folder.watermark_text,
                opacity=folder.watermark_opacity,
                position=folder.watermark_position,
                font_size=folder.watermark_font_size,
            ),
            allow_download=folder.allow_download,
            allow_client_selection=folder.allow_client_selection,
            download_count=folder.download_count,
        )


class FolderDownloadRequest(BaseModel):
    """Optional body of ``POST /api/folders/{id}/download``."""

    model_config = ConfigDict(extra="forbid")

    password: Optional[str] = Field(None, validation_alias=AliasChoices("password", "secret"))

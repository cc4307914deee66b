"""Bucket configuration schemas for s3-navigator."""

import uuid
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .core import settings

BucketStatus = Literal["untested", "connected", "failed"]


class BucketConfig(BaseModel):
    """Connection parameters and scoping for one browsable bucket."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = Field(..., min_length=1, description="Display alias")
    bucket: str = Field(..., min_length=1, description="S3 bucket name")
    region: str = Field(
        default_factory=lambda: settings.default_region, description="AWS region"
    )
    access_key_id: Optional[str] = Field(None, description="AWS access key ID")
    secret_access_key: Optional[str] = Field(None, description="AWS secret access key")
    session_token: Optional[str] = Field(None, description="AWS session token")
    endpoint_url: Optional[str] = Field(
        None, description="Custom S3 endpoint URL for S3-compatible services"
    )
    aws_profile: Optional[str] = Field(None, description="AWS CLI profile name")
    root_folder: Optional[str] = Field(
        None, description="Folder the session is scoped to; empty for the whole bucket"
    )
    owner: Optional[str] = Field(None, description="Username owning this entry")
    status: BucketStatus = "untested"

    @property
    def root_prefix(self) -> str:
        """Root folder normalized to end with "/" ("" grants root access)."""
        if not self.root_folder:
            return ""
        if self.root_folder.endswith("/"):
            return self.root_folder
        return f"{self.root_folder}/"

    @property
    def archive_name(self) -> str:
        return f"{self.bucket}-selection.zip"

"""Photo upload schemas"""

from typing import List
from pydantic import Field

from estate_pulse.schemas.common import CamelModel


class PhotoUploadResponse(CamelModel):
    """Result of a multi-file upload; failed files are counted, not retried"""
    uploaded: List[str] = Field(..., description="Public URLs of the files that were stored")
    failed_count: int = Field(..., ge=0)
    photos: List[str] = Field(..., description="Full photo list after the upload")
    message: str

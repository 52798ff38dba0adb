"""Photo storage service backed by S3-compatible object storage"""

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import boto3
from botocore.exceptions import ClientError
from botocore.config import Config

from estate_pulse.config import settings

logger = logging.getLogger(__name__)


class PhotoStorageError(Exception):
    """Base exception for photo storage errors"""
    pass


class StorageConnectionError(PhotoStorageError):
    """Object storage connection error"""
    pass


class InvalidFileTypeError(PhotoStorageError):
    """Invalid file type error"""
    pass


class FileTooLargeError(PhotoStorageError):
    """File too large error"""
    pass


class TooManyFilesError(PhotoStorageError):
    """Upload would exceed the per-record photo limit"""
    pass


class PhotoValidationError(PhotoStorageError):
    """One or more files in a batch failed validation"""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


@dataclass
class PhotoFile:
    """A file received for upload"""
    file_name: str
    content_type: str
    data: bytes


@dataclass
class PhotoUploadResult:
    """URLs of stored files, in input order, and how many failed"""
    urls: List[str] = field(default_factory=list)
    failed_count: int = 0


class PhotoStorageService:
    """Service for storing project and unit photos with public URLs"""

    def __init__(self):
        """Initialize S3 client with retry configuration"""
        self.max_file_size = settings.photo_max_size_mb * 1024 * 1024
        self.max_files = settings.photo_max_files

        retry_config = Config(
            retries={
                "max_attempts": 3,
                "mode": "standard",
            },
            connect_timeout=5,
            read_timeout=10,
        )

        client_kwargs = {
            "region_name": settings.aws_region,
            "config": retry_config,
        }

        # Add credentials if provided (not needed for IAM roles)
        if settings.aws_access_key_id and settings.aws_secret_access_key:
            client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
            client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key

        # Use custom endpoint for local development (MinIO)
        if settings.aws_endpoint_url:
            client_kwargs["endpoint_url"] = settings.aws_endpoint_url

        try:
            self.s3_client = boto3.client("s3", **client_kwargs)
            logger.info(f"S3 client initialized for bucket: {settings.s3_bucket}")
        except Exception as e:
            logger.error(f"Failed to initialize S3 client: {e}")
            raise StorageConnectionError(f"Failed to initialize S3 client: {e}")

    def validate_file(self, file_size: int, mime_type: str) -> None:
        """
        Validate file size and MIME type.

        Args:
            file_size: File size in bytes
            mime_type: MIME type of the file

        Raises:
            FileTooLargeError: If file exceeds maximum size
            InvalidFileTypeError: If the file is not an image
        """
        if not (mime_type or "").startswith("image/"):
            raise InvalidFileTypeError("Only image files are allowed")

        if file_size > self.max_file_size:
            raise FileTooLargeError(
                f"File size must be less than {settings.photo_max_size_mb}MB"
            )

    def validate_batch(self, files: Sequence[PhotoFile], existing_count: int = 0) -> None:
        """
        Validate a whole batch before anything is uploaded.

        Raises:
            TooManyFilesError: If the batch would exceed the photo limit
            PhotoValidationError: Listing every file that failed validation
        """
        if existing_count + len(files) > self.max_files:
            raise TooManyFilesError(f"Maximum {self.max_files} photos allowed")

        errors = []
        for index, photo in enumerate(files, start=1):
            try:
                self.validate_file(len(photo.data), photo.content_type)
            except PhotoStorageError as e:
                errors.append(f"File {index}: {e}")

        if errors:
            raise PhotoValidationError(errors)

    def generate_photo_key(
        self, project_id: str, file_name: str, unit_id: Optional[str] = None
    ) -> str:
        """
        Generate an object key following the structure:
        {project_id}/{unit_id or "project"}/{epoch_ms}_{random}.{extension}

        Args:
            project_id: Owning project UUID
            file_name: Original file name, used for the extension
            unit_id: Owning unit UUID, or None for project-level photos

        Returns:
            Object key string
        """
        extension = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else "jpg"
        timestamp = int(time.time() * 1000)
        token = uuid.uuid4().hex[:12]
        return f"{project_id}/{unit_id or 'project'}/{timestamp}_{token}.{extension}"

    def public_url(self, s3_key: str) -> str:
        """Publicly resolvable URL of a stored object"""
        if settings.photo_public_base_url:
            return f"{settings.photo_public_base_url.rstrip('/')}/{s3_key}"
        if settings.aws_endpoint_url:
            # For local development with MinIO
            return f"{settings.aws_endpoint_url}/{settings.s3_bucket}/{s3_key}"
        return f"https://{settings.s3_bucket}.s3.{settings.aws_region}.amazonaws.com/{s3_key}"

    def upload_bytes(
        self, file_bytes: bytes, s3_key: str, content_type: str = "application/octet-stream"
    ) -> str:
        """
        Upload bytes to S3.

        Args:
            file_bytes: Bytes to upload
            s3_key: S3 key for the object
            content_type: Content type of the file

        Returns:
            Public URL of uploaded object

        Raises:
            StorageConnectionError: If upload fails
        """
        try:
            self.s3_client.put_object(
                Bucket=settings.s3_bucket,
                Key=s3_key,
                Body=file_bytes,
                ContentType=content_type,
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"Error uploading bytes: {error_code} - {e}")
            raise StorageConnectionError(f"Failed to upload bytes: {error_code}")
        except Exception as e:
            logger.error(f"Unexpected error uploading bytes: {e}")
            raise StorageConnectionError(f"Failed to upload bytes: {str(e)}")

        url = self.public_url(s3_key)
        logger.info(f"Uploaded {len(file_bytes)} bytes to {url}")
        return url

    async def upload_photos(
        self,
        project_id: str,
        files: Sequence[PhotoFile],
        unit_id: Optional[str] = None,
    ) -> PhotoUploadResult:
        """
        Upload a batch of photos concurrently.

        Every upload is awaited; failures are counted and never retried.

        Args:
            project_id: Owning project UUID
            files: Files to upload
            unit_id: Owning unit UUID, or None for project-level photos

        Returns:
            PhotoUploadResult with successful URLs in input order
        """
        loop = asyncio.get_event_loop()
        tasks = [
            loop.run_in_executor(
                None,
                self.upload_bytes,
                photo.data,
                self.generate_photo_key(project_id, photo.file_name, unit_id),
                photo.content_type,
            )
            for photo in files
        ]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        result = PhotoUploadResult()
        for photo, outcome in zip(files, outcomes):
            if isinstance(outcome, Exception):
                logger.error(f"Upload of {photo.file_name} failed: {outcome}")
                result.failed_count += 1
            else:
                result.urls.append(outcome)

        logger.info(
            f"Photo upload for project {project_id}: "
            f"{len(result.urls)} stored, {result.failed_count} failed"
        )
        return result

    def check_bucket(self) -> None:
        """
        Verify the bucket is reachable.

        Raises:
            StorageConnectionError: If the bucket cannot be reached
        """
        try:
            self.s3_client.head_bucket(Bucket=settings.s3_bucket)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            raise StorageConnectionError(f"Bucket {settings.s3_bucket} unavailable: {error_code}")

import logging
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from enrollment.config import settings

logger = logging.getLogger(__name__)

MISSING_BUCKET_CODES = ("404", "NoSuchBucket")


def _minio_client():
    return boto3.client(
        "s3",
        endpoint_url=settings.minio_endpoint,
        aws_access_key_id=settings.minio_access_key,
        aws_secret_access_key=settings.minio_secret_key,
        region_name="us-east-1",
        # MinIO serves buckets by path, not by virtual host
        config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
    )


class DocumentStorage:
    """Uploaded student documents, kept as objects in a MinIO bucket.

    Keys are grouped by student and requirement slot so an admin can browse a
    student's files directly in the MinIO console.
    """

    _instance: Optional["DocumentStorage"] = None

    def __init__(self, bucket: Optional[str] = None):
        self.bucket = bucket or settings.minio_bucket
        self.client = _minio_client()
        self._prepare_bucket()

    @classmethod
    def get_instance(cls) -> "DocumentStorage":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def _prepare_bucket(self):
        try:
            self.client.head_bucket(Bucket=self.bucket)
            return
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code not in MISSING_BUCKET_CODES:
                logger.warning(f"Could not check document bucket {self.bucket}: {e}")
                return

        try:
            self.client.create_bucket(Bucket=self.bucket)
            logger.info(f"Created document bucket {self.bucket}")
        except ClientError as e:
            logger.warning(f"Could not create document bucket {self.bucket}: {e}")

    @staticmethod
    def key_for(student_id: int, slot: str, file_name: str) -> str:
        safe_slot = "".join(c if c.isalnum() else "-" for c in slot).strip("-").lower()
        return f"students/{student_id}/{safe_slot}/{file_name}"

    def upload_document(self, content: bytes, student_id: int, slot: str,
                        file_name: str, mime_type: str) -> str:
        """
        Store one file for a document requirement slot.

        Args:
            content: Decoded file bytes
            student_id: Owning student, used as the key prefix
            slot: Name of the requirement the file satisfies
            file_name: Name the student uploaded the file under
            mime_type: Content type saved on the object

        Returns:
            The object key. Storage errors propagate as ``ClientError``.
        """
        key = self.key_for(student_id, slot, file_name)
        try:
            self.client.put_object(Bucket=self.bucket, Key=key, Body=content, ContentType=mime_type)
        except ClientError as e:
            logger.error(f"Upload of {key} failed: {e}")
            raise
        logger.info(f"Stored document {key} ({len(content)} bytes)")
        return key

    def download_url(self, key: str, expires_in: int = 900) -> str:
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket, "Key": key},
            ExpiresIn=expires_in,
        )

    def delete_document(self, key: str) -> bool:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            logger.error(f"Removal of {key} failed: {e}")
            return False
        logger.info(f"Removed document {key}")
        return True

import uuid
from fastapi import UploadFile, HTTPException
from botocore.exceptions import ClientError

from elite_coach.core.config import settings

ALLOWED_CONTENT_TYPES = {
    "image/jpeg",
    "image/png",
    "image/gif",
}
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MB
PRESIGNED_URL_EXPIRES = 3600


def _get_session():
    import aiobotocore.session
    session = aiobotocore.session.get_session()
    return session.create_client(
        "s3",
        endpoint_url=f"http://{settings.MINIO_ENDPOINT}",
        aws_access_key_id=settings.MINIO_ACCESS_KEY,
        aws_secret_access_key=settings.MINIO_SECRET_KEY,
        region_name="us-east-1",
    )


async def ensure_bucket_exists() -> None:
    async with _get_session() as client:
        try:
            await client.head_bucket(Bucket=settings.MINIO_BUCKET)
        except ClientError:
            await client.create_bucket(Bucket=settings.MINIO_BUCKET)


def validate_photo(file: UploadFile, content: bytes) -> None:
    if file.content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"File type '{file.content_type}' is not allowed. Allowed: JPEG, PNG, GIF.",
        )
    if len(content) == 0:
        raise HTTPException(status_code=400, detail="Uploaded file is empty.")
    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=413,
            detail="File size exceeds 10 MB limit.",
        )


def build_key(user_id: int, progress_id: int, filename: str) -> str:
    """Object key: progress/<user>/<record>/<random>.<ext>"""
    ext = filename.rsplit(".", 1)[-1].lower() if filename and "." in filename else "bin"
    return f"progress/{user_id}/{progress_id}/{uuid.uuid4().hex}.{ext}"


async def upload_photo(file: UploadFile, user_id: int, progress_id: int) -> tuple[str, str, int]:
    """Upload a progress photo. Returns (s3_key, content_type, size)."""
    content = await file.read()
    validate_photo(file, content)

    s3_key = build_key(user_id, progress_id, file.filename or "")

    async with _get_session() as client:
        await client.put_object(
            Bucket=settings.MINIO_BUCKET,
            Key=s3_key,
            Body=content,
            ContentType=file.content_type,
        )

    return s3_key, file.content_type, len(content)


async def generate_presigned_url(s3_key: str, expires: int = PRESIGNED_URL_EXPIRES) -> str:
    async with _get_session() as client:
        url = await client.generate_presigned_url(
            "get_object",
            Params={"Bucket": settings.MINIO_BUCKET, "Key": s3_key},
            ExpiresIn=expires,
        )
    return url


async def delete_file(s3_key: str) -> None:
    async with _get_session() as client:
        await client.delete_object(Bucket=settings.MINIO_BUCKET, Key=s3_key)

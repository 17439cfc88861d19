import logging
from functools import lru_cache

from minio import Minio

from formapi.config import config

logger = logging.getLogger(__name__)


@lru_cache()
def get_minio_client() -> Minio:
    return Minio(
        endpoint=config.MINIO_ENDPOINT,
        access_key=config.MINIO_ROOT_USER,
        secret_key=config.MINIO_ROOT_PASSWORD,
        secure=config.MINIO_SECURE
    )


def object_url(obj_name: str) -> str:
    scheme = "https" if config.MINIO_SECURE else "http"
    return f"{scheme}://{config.MINIO_ENDPOINT}/{config.MINIO_BUCKET}/{obj_name}"


def ensure_bucket() -> bool:
    """Create the upload bucket if needed; failures are logged, not raised."""
    if not config.MINIO_ROOT_USER or not config.MINIO_ROOT_PASSWORD:
        logger.warning("MinIO credentials MISSING, image uploads will fail")
        return False
    try:
        minio_client = get_minio_client()
        bucket = config.MINIO_BUCKET
        if not minio_client.bucket_exists(bucket):
            minio_client.make_bucket(bucket)
        logger.info(f"MinIO bucket '{bucket}' is ready.")
        return True
    except Exception as e:
        logger.error(f"MinIO setup failed: {e}")
        return False

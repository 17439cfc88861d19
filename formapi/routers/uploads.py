import io
import logging
from typing import Annotated
from uuid import uuid4

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from minio import Minio
from werkzeug.utils import secure_filename

from formapi.config import config
from formapi.models.record import UploadedFile
from formapi.objectstore import get_minio_client, object_url

router = APIRouter()
logger = logging.getLogger(__name__)

ALLOWED = {"jpg", "jpeg", "png", "gif", "webp", "bmp"}


@router.post("", response_model=UploadedFile, status_code=201)
async def upload_image(
    minio_client: Annotated[Minio, Depends(get_minio_client)],
    file: UploadFile = File(...),
):
    if not file or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file provided"
        )

    ext = file.filename.rsplit(".", 1)[-1].lower()
    if ext not in ALLOWED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File type not allowed"
        )

    filename = secure_filename(file.filename)
    obj_name = f"{uuid4().hex}_{filename}"
    content_type = file.content_type or "application/octet-stream"

    try:
        file_content = await file.read()
        file_size = len(file_content)

        minio_client.put_object(
            bucket_name=config.MINIO_BUCKET,
            object_name=obj_name,
            data=io.BytesIO(file_content),
            length=file_size,
            content_type=content_type
        )
    except Exception as e:
        logger.error(f"Upload of {filename} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store file"
        ) from e

    logger.info(f"Stored {obj_name} ({file_size} bytes)")
    return {
        "filename": filename,
        "content_type": content_type,
        "url": object_url(obj_name),
        "size": file_size,
    }

import logging
import os
from typing import Optional

from fastapi import UploadFile

from hotel_api.utils.errors import BadRequest, InternalError

logger = logging.getLogger(__name__)


def photo_filename(resource_id: int, original_name: str) -> str:
    """``photo_<id><ext>``, keeping the uploaded file's extension."""
    ext = os.path.splitext(original_name or "")[1]
    return f"photo_{resource_id}{ext}"


def save_photo(file: Optional[UploadFile], resource_id: int, config) -> str:
    """
    Validate an uploaded image and write it to FILE_UPLOAD_PATH.

    Nothing is written unless every check passes.

    Returns:
        str: the stored filename.
    """
    if file is None or not file.filename:
        raise BadRequest("Please upload a file")

    if not (file.content_type or "").startswith("image"):
        raise BadRequest("Please upload an image file")

    contents = file.file.read(config.MAX_FILE_UPLOAD + 1)
    if len(contents) > config.MAX_FILE_UPLOAD:
        raise BadRequest(f"Please upload an image less than {config.MAX_FILE_UPLOAD}")

    filename = photo_filename(resource_id, file.filename)
    path = os.path.join(config.FILE_UPLOAD_PATH, filename)
    try:
        os.makedirs(config.FILE_UPLOAD_PATH, exist_ok=True)
        with open(path, "wb") as out:
            out.write(contents)
    except OSError as e:
        logger.error("Writing upload %s failed: %s", path, e)
        raise InternalError("Problem with file upload")

    logger.info("Stored upload %s (%d bytes)", path, len(contents))
    return filename

import io
from dataclasses import dataclass

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from app.core.exceptions import ValidationError

ALLOWED_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp"
}


@dataclass(frozen=True)
class ImageUpload:
    content: bytes
    filename: str | None = None


# =====================================================================
#                  CONVERT ANY IMAGE TO JPEG (AUTO-CONVERT)
# =====================================================================
def convert_to_jpeg(contents: bytes) -> bytes:
    try:
        img = Image.open(io.BytesIO(contents)).convert("RGB")
    except (UnidentifiedImageError, OSError):
        raise ValidationError("Invalid image file")

    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=90)
    buffer.seek(0)

    return buffer.read()


def read_image_upload(upload_file: UploadFile | None, max_bytes: int) -> ImageUpload | None:
    """Validate a multipart image field and normalise it to JPEG bytes.

    Returns None when no file was sent so callers can decide whether the
    image is mandatory.
    """
    if upload_file is None or not upload_file.filename:
        return None

    content_type = (upload_file.content_type or "").lower()
    if content_type not in ALLOWED_TYPES:
        raise ValidationError(
            f"Unsupported file type {upload_file.content_type}. Allowed: JPEG, JPG, PNG, WEBP"
        )

    contents = upload_file.file.read()
    if not contents:
        raise ValidationError("Uploaded image is empty")
    if len(contents) > max_bytes:
        raise ValidationError(f"Image exceeds the {max_bytes // (1024 * 1024)}MB limit")

    return ImageUpload(content=convert_to_jpeg(contents), filename=upload_file.filename)

import os
import uuid
from datetime import datetime

from fastapi import UploadFile
from passlib.context import CryptContext

from exceptions import ValidationError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}
CHUNK_SIZE = 64 * 1024


def hash(password: str) -> str:
    return pwd_context.hash(password)


def verify(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def save_upload_file(upload_file: UploadFile, folder: str, max_size: int, prefix: str = "image") -> str:
    """
    Save an uploaded image into ``folder`` under a unique filename.

    Only JPEG, PNG and GIF uploads up to ``max_size`` bytes are accepted.
    Returns the stored filename, which is what the database keeps.
    """
    extension = os.path.splitext(upload_file.filename or "")[1].lower()
    if extension not in ALLOWED_EXTENSIONS or upload_file.content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError("Only image files are allowed (JPEG, JPG, PNG, GIF).")

    os.makedirs(folder, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    unique_id = str(uuid.uuid4())[:8]
    filename = f"{prefix}-{timestamp}-{unique_id}{extension}"
    file_path = os.path.join(folder, filename)

    too_large = ValidationError(f"Image exceeds the upload limit of {max_size} bytes.")
    if upload_file.size is not None and upload_file.size > max_size:
        raise too_large

    # Stop reading as soon as the limit is passed.
    written = 0
    with open(file_path, "wb") as buffer:
        while True:
            chunk = upload_file.file.read(CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if written > max_size:
                break
            buffer.write(chunk)

    if written > max_size:
        os.remove(file_path)
        raise too_large

    return filename

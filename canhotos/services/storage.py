import os
import uuid
from pathlib import Path

from fastapi import HTTPException, UploadFile, status

from canhotos.core.config import get_settings

FILES_URL_PREFIX = "/files"

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp"}
PDF_EXTENSIONS = {".pdf"}


def ensure_upload_dir() -> Path:
    settings = get_settings()
    root = Path(settings.upload_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root


def _check_file_type(file: UploadFile) -> str:
    ext = Path(file.filename or "").suffix.lower()
    content_type = (file.content_type or "").lower()
    if content_type.startswith("image/") and ext in IMAGE_EXTENSIONS:
        return ext
    if content_type == "application/pdf" and ext in PDF_EXTENSIONS:
        return ext
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="File type not allowed. Only images and PDFs are accepted",
    )


async def save_upload_file(file: UploadFile) -> str:
    """Store the upload under ``upload_dir`` and return its public locator."""
    settings = get_settings()
    ext = _check_file_type(file)

    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    stored_name = f"{uuid.uuid4()}{ext}"
    root = ensure_upload_dir()
    final_path = root / stored_name

    total = 0
    with final_path.open("wb") as handle:
        while True:
            chunk = await file.read(1024 * 1024)
            if not chunk:
                break
            total += len(chunk)
            if total > max_bytes:
                handle.close()
                os.remove(final_path)
                raise HTTPException(
                    status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    detail=f"File too large. Maximum {settings.max_upload_size_mb}MB",
                )
            handle.write(chunk)
    await file.close()
    if total == 0:
        os.remove(final_path)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty")
    return f"{FILES_URL_PREFIX}/{stored_name}"


def local_path_for(locator: str) -> Path | None:
    """Map a ``/files/...`` locator back to its file; external URLs have none."""
    if not locator.startswith(f"{FILES_URL_PREFIX}/"):
        return None
    return Path(get_settings().upload_dir) / Path(locator).name


def delete_file_if_exists(locator: str) -> None:
    p = local_path_for(locator)
    if p is not None and p.exists():
        p.unlink(missing_ok=True)

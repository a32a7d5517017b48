"""
Vitrine Backend: File Intake Service
======================================

What:  Validates uploaded images, writes them under the public content
       directory, and maps stored files to/from their public URLs.
How:   Extension and size checks first (cheap), then an async write with
       aiofiles to <public_root>/uploads/<epoch-ms>-<sanitized name>.
Who:   Called by ProjectService when a portfolio project is created/deleted.
When:  After the multipart body is parsed, before the Project row is inserted.

Filenames:
    1705312800123-storefront.jpg
    └─ epoch milliseconds ─┘ └ uploaded basename, unsafe characters → "_"

    The timestamp keeps names distinct in practice; two uploads of the same
    name in the same millisecond would collide. Only the basename of the
    client-supplied name is used, so it can never point outside the upload
    directory.
"""

import logging
import os
import re
import time
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from vitrine.config import settings
from vitrine.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)

# Image formats accepted for portfolio uploads
ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg"}

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileService:
    """
    Manages upload validation, storage, and cleanup.

    Directory Structure:
        public/
        └── uploads/
            ├── 1705312800123-storefront.jpg
            └── 1705312999001-logo.png

    Public URL of a stored file: /uploads/<filename>
    """

    def __init__(self, public_root: Optional[str] = None, uploads_dirname: Optional[str] = None):
        """
        Args:
            public_root: Override the public content root (used in tests).
                         If None, uses settings.public_root.
            uploads_dirname: Sub-directory for uploads (default settings.uploads_dirname).
        """
        self.public_root = Path(public_root or settings.public_root).resolve()
        self.uploads_dirname = uploads_dirname or settings.uploads_dirname
        self.upload_dir = self.public_root / self.uploads_dirname

    # ── Validation ────────────────────────────────────────────────────────

    def validate_extension(self, filename: str) -> str:
        """
        Returns the normalized extension (lowercase with dot).

        Raises:
            ValidationError if the extension is not an allowed image type.
        """
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext or filename}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="image",
                context={"extension": ext, "allowed": sorted(ALLOWED_EXTENSIONS)},
            )
        return ext

    def validate_size(self, content_length: Optional[int], actual_size: int) -> None:
        """
        Checks the declared size (when the client sent one) and the actual
        byte count against settings.max_file_size.

        Raises:
            ValidationError for empty or oversized files.
        """
        max_mb = settings.max_file_size / (1024 * 1024)

        if actual_size == 0:
            raise ValidationError(message="Uploaded image is empty", field="image")

        if content_length and content_length > settings.max_file_size:
            raise ValidationError(
                message=f"File size exceeds maximum of {max_mb:.0f}MB. Please upload a smaller image.",
                field="image",
                context={"max_size_mb": max_mb, "reported_size": content_length},
            )

        if actual_size > settings.max_file_size:
            raise ValidationError(
                message=(
                    f"File is too large ({actual_size / (1024 * 1024):.1f}MB); "
                    f"maximum is {max_mb:.0f}MB."
                ),
                field="image",
                context={"max_size_mb": max_mb, "actual_size": actual_size},
            )

    # ── Naming ────────────────────────────────────────────────────────────

    @staticmethod
    def sanitize_filename(filename: str) -> str:
        """Basename of `filename` with every unsafe character replaced by '_'."""
        base = os.path.basename(filename.replace("\\", "/"))
        cleaned = _UNSAFE_CHARS.sub("_", base).lstrip(".")
        return cleaned or "upload"

    def generate_filename(self, filename: str) -> str:
        return f"{time.time_ns() // 1_000_000}-{self.sanitize_filename(filename)}"

    def public_url(self, stored_name: str) -> str:
        return f"/{self.uploads_dirname}/{stored_name}"

    def path_for_url(self, url: str) -> Optional[Path]:
        """
        Map a public upload URL back to its file on disk.

        Returns None for URLs that do not point into the upload directory.
        """
        prefix = f"/{self.uploads_dirname}/"
        if not url or not url.startswith(prefix):
            return None
        name = url[len(prefix):]
        if not name or "/" in name or name in {".", ".."}:
            return None
        return self.upload_dir / name

    # ── Storage ───────────────────────────────────────────────────────────

    async def store_file(self, content: bytes, filename: str) -> Tuple[str, str]:
        """
        Write file content to the upload directory.

        Returns:
            Tuple of (absolute_path, public_url).

        Raises:
            FileStorageError if directory creation or file write fails.
        """
        stored_name = self.generate_filename(filename)
        absolute_path = self.upload_dir / stored_name

        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store file at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(absolute_path), "os_error": str(e)},
            )

        logger.info("File stored: %s (%d bytes)", stored_name, len(content))
        return str(absolute_path), self.public_url(stored_name)

    async def cleanup_file(self, file_path: str) -> None:
        """
        Remove a stored file; best effort.

        When:    A project row could not be saved after its image was written,
                 or a project was deleted.
        Missing files are ignored; other OS errors are logged, not raised.
        """
        path = Path(file_path)
        try:
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up file: %s", path.name)
            else:
                logger.debug("Cleanup: file already gone: %s", path.name)
        except OSError as e:
            logger.warning("Failed to clean up file %s: %s", file_path, str(e))

    async def validate_and_store(
        self,
        filename: str,
        content: bytes,
        content_length: Optional[int] = None,
    ) -> Tuple[str, str]:
        """
        Complete intake pipeline: extension → size → write.

        Returns:
            Tuple of (absolute_path, public_url).
        """
        self.validate_extension(filename)
        self.validate_size(content_length, len(content))
        return await self.store_file(content, filename)


# ── Singleton Instance ────────────────────────────────────────────────────
file_service = FileService()

"""
Moves inline base64 images out of rich-text HTML into the upload root.
"""

import base64
import binascii
import re

import structlog

from ..core.exceptions import ContentProcessingError, UploadPolicyError, UploadViolation
from .file_storage import FileStorageService
from .upload_policy import IMAGE_SUBTYPES

logger = structlog.get_logger(__name__)

BASE64_IMG_PATTERN = re.compile(r'<img[^>]+src="data:image/([a-zA-Z0-9.+-]+);base64,([^"]*)"[^>]*>')
DATA_URI_SRC_PATTERN = re.compile(r'src="data:image/[^"]*"')


class Base64ImageExtractor:
    def __init__(self, storage: FileStorageService):
        self.storage = storage

    @staticmethod
    def _extension(image_type: str) -> str:
        image_type = image_type.lower()
        if image_type == "jpeg":
            return "jpg"
        return image_type

    @staticmethod
    def _check_type(image_type: str) -> None:
        if image_type.lower() not in IMAGE_SUBTYPES:
            raise UploadPolicyError(
                f"Unsupported inline image type: image/{image_type}",
                violation=UploadViolation.UNSUPPORTED_FILE_TYPE,
                field="description",
            )

    @staticmethod
    def _decode(data: str) -> bytes:
        # Editors sometimes wrap long data URIs
        compact = re.sub(r"\s+", "", data)
        try:
            return base64.b64decode(compact, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ContentProcessingError("Failed to process embedded image", details={"reason": str(e)}) from e

    def extract(self, html: str) -> str:
        """Store every base64 <img> src and return the HTML pointing at the stored files."""
        if not html or "base64," not in html:
            return html

        matches = list(BASE64_IMG_PATTERN.finditer(html))
        # Reject the whole document before anything is written
        for match in matches:
            self._check_type(match.group(1))

        parts = []
        position = 0
        extracted = 0

        for match in matches:
            image_type, data = match.group(1), match.group(2)
            tag = match.group(0)
            parts.append(html[position:match.start()])
            position = match.end()

            if not data:
                parts.append(tag)
                continue

            content = self._decode(data)
            try:
                stored_path = self.storage.save_bytes(content, f"base64-image.{self._extension(image_type)}")
            except OSError as e:
                raise ContentProcessingError("Failed to store embedded image", details={"reason": str(e)}) from e

            parts.append(DATA_URI_SRC_PATTERN.sub(f'src="{stored_path}"', tag, count=1))
            extracted += 1

        parts.append(html[position:])

        if extracted:
            logger.info("Extracted inline images", count=extracted)
        return "".join(parts)

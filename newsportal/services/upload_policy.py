"""
Multipart ingestion: turns a form request into a typed upload bundle and
enforces size, type and count limits before anything reaches storage.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Dict, FrozenSet, List, Optional

import structlog
from fastapi import Request
from starlette.datastructures import UploadFile

from ..config import get_settings
from ..core.exceptions import UploadPolicyError, UploadViolation

logger = structlog.get_logger(__name__)

MB = 1024 * 1024

IMAGE_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".gif", ".webp"})
IMAGE_SUBTYPES = frozenset({"jpeg", "jpg", "png", "gif", "webp"})
VIDEO_EXTENSIONS = frozenset({".mp4", ".avi", ".mov", ".wmv", ".flv", ".webm", ".mkv"})

# Rich-text description plus any inline base64 images
MAX_TEXT_PART_SIZE = 20 * MB


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class UploadField(str, Enum):
    FEATURED_IMAGE = "featuredImage"
    IMAGE = "image"  # Legacy name of featuredImage
    VIDEO_FILE = "videoFile"
    CONTENT_IMAGES = "contentImages"


@dataclass(frozen=True)
class FieldRule:
    kind: MediaKind
    max_count: int = 1


@dataclass
class UploadedPart:
    field: UploadField
    filename: str
    content_type: str
    size: int
    file: BinaryIO


@dataclass
class UploadBundle:
    fields: Dict[str, str] = field(default_factory=dict)
    files: Dict[UploadField, List[UploadedPart]] = field(default_factory=dict)

    def first(self, *names: UploadField) -> Optional[UploadedPart]:
        for name in names:
            parts = self.files.get(name)
            if parts:
                return parts[0]
        return None

    @property
    def featured_image(self) -> Optional[UploadedPart]:
        return self.first(UploadField.FEATURED_IMAGE, UploadField.IMAGE)

    @property
    def video_file(self) -> Optional[UploadedPart]:
        return self.first(UploadField.VIDEO_FILE)

    @property
    def file_count(self) -> int:
        return sum(len(parts) for parts in self.files.values())


_VIOLATION_MESSAGES = {
    UploadViolation.FILE_TOO_LARGE: "File is too large ({field}: max {limit} MB)",
    UploadViolation.UNSUPPORTED_FILE_TYPE: "Unsupported file type for {field}: allowed {allowed}",
    UploadViolation.TOO_MANY_FILES: "Too many files ({field}: max {limit})",
    UploadViolation.UNEXPECTED_FIELD: "Unexpected file field: {field}",
}


def _violation(violation: UploadViolation, field_name: str, **context) -> UploadPolicyError:
    message = _VIOLATION_MESSAGES[violation].format(field=field_name, **context)
    return UploadPolicyError(message, violation=violation, field=field_name)


def _file_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    stream = upload.file
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(0)
    return size


class UploadPolicy:
    def __init__(
        self,
        rules: Dict[UploadField, FieldRule],
        max_file_size: int,
        max_files: int,
        ignored_fields: FrozenSet[UploadField] = frozenset(),
    ):
        self.rules = rules
        self.max_file_size = max_file_size
        self.max_files = max_files
        self.ignored_fields = ignored_fields

    def _check_type(self, rule: FieldRule, field_name: str, filename: str, content_type: str) -> None:
        extension = os.path.splitext(filename)[1].lower()
        content_type = (content_type or "").lower()
        major, _, subtype = content_type.partition("/")

        if rule.kind == MediaKind.IMAGE:
            valid = extension in IMAGE_EXTENSIONS and major == "image" and subtype in IMAGE_SUBTYPES
            allowed = "jpeg, jpg, png, gif, webp"
        else:
            valid = extension in VIDEO_EXTENSIONS and major == "video"
            allowed = "mp4, avi, mov, wmv, flv, webm, mkv"

        if not valid:
            raise _violation(UploadViolation.UNSUPPORTED_FILE_TYPE, field_name, allowed=allowed)

    def check_part(self, field_name: str, upload: UploadFile) -> Optional[UploadedPart]:
        """Validate one file part; returns None for parts that are skipped."""
        try:
            upload_field = UploadField(field_name)
        except ValueError:
            raise _violation(UploadViolation.UNEXPECTED_FIELD, field_name)

        if upload_field in self.ignored_fields:
            logger.info("Ignoring upload field", field=field_name, filename=upload.filename)
            return None

        rule = self.rules.get(upload_field)
        if rule is None:
            raise _violation(UploadViolation.UNEXPECTED_FIELD, field_name)

        self._check_type(rule, field_name, upload.filename or "", upload.content_type or "")

        size = _file_size(upload)
        if size > self.max_file_size:
            raise _violation(UploadViolation.FILE_TOO_LARGE, field_name, limit=self.max_file_size // MB)

        return UploadedPart(
            field=upload_field,
            filename=upload.filename,
            content_type=upload.content_type,
            size=size,
            file=upload.file,
        )

    async def parse(self, request: Request) -> UploadBundle:
        form = await request.form(max_part_size=MAX_TEXT_PART_SIZE)
        bundle = UploadBundle()
        received_files = 0

        for field_name, value in form.multi_items():
            if not isinstance(value, UploadFile):
                bundle.fields[field_name] = value
                continue

            # Browsers send an empty part when no file was chosen
            if not value.filename and not _file_size(value):
                continue

            received_files += 1
            if received_files > self.max_files:
                raise _violation(UploadViolation.TOO_MANY_FILES, field_name, limit=self.max_files)

            part = self.check_part(field_name, value)
            if part is None:
                continue

            parts = bundle.files.setdefault(part.field, [])
            if len(parts) >= self.rules[part.field].max_count:
                raise _violation(UploadViolation.TOO_MANY_FILES, field_name, limit=self.rules[part.field].max_count)
            parts.append(part)

        logger.debug("Parsed multipart form", fields=sorted(bundle.fields), files=bundle.file_count)
        return bundle


def article_upload_policy() -> UploadPolicy:
    settings = get_settings()
    return UploadPolicy(
        rules={
            UploadField.FEATURED_IMAGE: FieldRule(MediaKind.IMAGE),
            UploadField.IMAGE: FieldRule(MediaKind.IMAGE),
            UploadField.VIDEO_FILE: FieldRule(MediaKind.VIDEO),
        },
        max_file_size=settings.max_media_file_size_mb * MB,
        max_files=settings.max_files_per_request,
        ignored_fields=frozenset({UploadField.CONTENT_IMAGES}),
    )


def editor_image_upload_policy() -> UploadPolicy:
    settings = get_settings()
    return UploadPolicy(
        rules={UploadField.IMAGE: FieldRule(MediaKind.IMAGE)},
        max_file_size=settings.max_editor_image_size_mb * MB,
        max_files=1,
    )

import io

import pytest
from starlette.datastructures import Headers, UploadFile

from newsportal.core.exceptions import UploadPolicyError, UploadViolation
from newsportal.services.upload_policy import (
    FieldRule,
    MediaKind,
    UploadBundle,
    UploadField,
    UploadPolicy,
    UploadedPart,
    article_upload_policy,
    editor_image_upload_policy,
)


def make_upload(filename, content_type, content=b"data"):
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        size=len(content),
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
def policy():
    return UploadPolicy(
        rules={
            UploadField.FEATURED_IMAGE: FieldRule(MediaKind.IMAGE),
            UploadField.VIDEO_FILE: FieldRule(MediaKind.VIDEO),
        },
        max_file_size=10,
        max_files=3,
        ignored_fields=frozenset({UploadField.CONTENT_IMAGES}),
    )


def test_accepts_valid_image(policy):
    part = policy.check_part("featuredImage", make_upload("photo.JPG", "image/jpeg"))

    assert part.field == UploadField.FEATURED_IMAGE
    assert part.size == 4
    assert part.filename == "photo.JPG"


def test_accepts_valid_video(policy):
    part = policy.check_part("videoFile", make_upload("clip.mp4", "video/mp4"))
    assert part.field == UploadField.VIDEO_FILE


@pytest.mark.parametrize(
    "field,filename,content_type",
    [
        ("featuredImage", "doc.pdf", "application/pdf"),
        ("featuredImage", "photo.jpg", "application/octet-stream"),
        ("featuredImage", "photo.bmp", "image/bmp"),
        ("featuredImage", "clip.mp4", "video/mp4"),
        ("videoFile", "clip.txt", "video/mp4"),
        ("videoFile", "photo.png", "image/png"),
    ],
)
def test_rejects_wrong_type(policy, field, filename, content_type):
    with pytest.raises(UploadPolicyError) as exc_info:
        policy.check_part(field, make_upload(filename, content_type))

    assert exc_info.value.violation == UploadViolation.UNSUPPORTED_FILE_TYPE
    assert exc_info.value.status_code == 400
    assert exc_info.value.field == field


def test_rejects_oversized_file(policy):
    with pytest.raises(UploadPolicyError) as exc_info:
        policy.check_part("featuredImage", make_upload("big.png", "image/png", b"x" * 11))

    assert exc_info.value.violation == UploadViolation.FILE_TOO_LARGE
    assert exc_info.value.error_code == "FILE_TOO_LARGE"


def test_rejects_unknown_field(policy):
    with pytest.raises(UploadPolicyError) as exc_info:
        policy.check_part("attachment", make_upload("photo.png", "image/png"))
    assert exc_info.value.violation == UploadViolation.UNEXPECTED_FIELD


def test_known_field_without_rule_is_unexpected(policy):
    with pytest.raises(UploadPolicyError) as exc_info:
        policy.check_part("image", make_upload("photo.png", "image/png"))
    assert exc_info.value.violation == UploadViolation.UNEXPECTED_FIELD


def test_ignored_field_is_skipped(policy):
    assert policy.check_part("contentImages", make_upload("inline.png", "image/png")) is None


def test_bundle_prefers_featured_image_over_legacy_name():
    featured = UploadedPart(UploadField.FEATURED_IMAGE, "a.png", "image/png", 1, io.BytesIO(b"a"))
    legacy = UploadedPart(UploadField.IMAGE, "b.png", "image/png", 1, io.BytesIO(b"b"))
    bundle = UploadBundle(files={UploadField.IMAGE: [legacy], UploadField.FEATURED_IMAGE: [featured]})

    assert bundle.featured_image is featured
    assert bundle.video_file is None
    assert bundle.file_count == 2


def test_legacy_image_field_is_featured_image():
    legacy = UploadedPart(UploadField.IMAGE, "b.png", "image/png", 1, io.BytesIO(b"b"))
    bundle = UploadBundle(files={UploadField.IMAGE: [legacy]})
    assert bundle.featured_image is legacy


def test_article_policy_limits():
    policy = article_upload_policy()

    assert policy.max_file_size == 500 * 1024 * 1024
    assert policy.max_files == 15
    assert UploadField.CONTENT_IMAGES in policy.ignored_fields
    assert set(policy.rules) == {UploadField.FEATURED_IMAGE, UploadField.IMAGE, UploadField.VIDEO_FILE}


def test_editor_policy_limits():
    policy = editor_image_upload_policy()

    assert policy.max_file_size == 5 * 1024 * 1024
    assert policy.max_files == 1
    assert set(policy.rules) == {UploadField.IMAGE}

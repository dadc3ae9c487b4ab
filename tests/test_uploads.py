"""Tests for upload profiles and the image file filter."""

from types import SimpleNamespace

import pytest
from sanic.request import File

from storefront.exceptions import PayloadTooLargeError, ValidationError
from storefront.uploads import CHAT_ATTACHMENTS, PRODUCT_FORM_DATA, PRODUCT_IMAGES, UploadProfile


def image(name="photo.jpg", mime="image/jpeg", size=16):
    return File(type=mime, body=b"\xff" * size, name=name)


class TestFileFilter:

    @pytest.mark.parametrize("name,mime", [
        ("a.jpg", "image/jpeg"),
        ("a.JPEG", "image/jpeg"),
        ("a.png", "image/png"),
        ("a.webp", "image/webp"),
    ])
    def test_allowed_images(self, name, mime):
        PRODUCT_IMAGES.filter_file(name, mime)

    def test_bad_extension(self):
        with pytest.raises(ValidationError, match="Invalid file extension"):
            PRODUCT_IMAGES.filter_file("invoice.pdf", "image/png")

    def test_bad_mime_type(self):
        with pytest.raises(ValidationError, match="Invalid MIME type"):
            PRODUCT_IMAGES.filter_file("photo.png", "image/gif")

    def test_missing_extension(self):
        with pytest.raises(ValidationError, match="Invalid file extension"):
            PRODUCT_IMAGES.filter_file("photo", "image/png")


class TestProfiles:

    def test_profile_limits(self):
        assert PRODUCT_IMAGES.max_file_size == 5 * 1024 * 1024
        assert PRODUCT_IMAGES.max_files == 10
        assert CHAT_ATTACHMENTS.max_file_size == 10 * 1024 * 1024
        assert CHAT_ATTACHMENTS.max_files == 7
        assert PRODUCT_FORM_DATA.max_file_size == 5 * 1024 * 1024
        assert PRODUCT_FORM_DATA.max_files == 10

    def test_accept_keeps_files_in_memory(self):
        accepted = PRODUCT_IMAGES.accept("images", [image(), image("b.png", "image/png")])

        assert [f.name for f in accepted] == ["photo.jpg", "b.png"]
        assert accepted[0].body == b"\xff" * 16
        assert accepted[0].size == 16
        assert accepted[1].extension == ".png"

    def test_too_many_files(self):
        profile = UploadProfile("tiny", max_file_size=1024, max_files=2)

        with pytest.raises(ValidationError) as exc_info:
            profile.accept("images", [image(), image(), image()])

        assert exc_info.value.error_code == "LIMIT_FILE_COUNT"

    def test_file_too_large(self):
        profile = UploadProfile("tiny", max_file_size=10, max_files=2)

        with pytest.raises(PayloadTooLargeError) as exc_info:
            profile.accept("images", [image(size=11)])

        assert exc_info.value.status_code == 413
        assert exc_info.value.error_code == "LIMIT_FILE_SIZE"

    def test_exact_size_limit_is_accepted(self):
        profile = UploadProfile("tiny", max_file_size=10, max_files=1)
        assert profile.accept("images", [image(size=10)])[0].size == 10

    def test_type_is_checked_before_size(self):
        profile = UploadProfile("tiny", max_file_size=10, max_files=1)

        with pytest.raises(ValidationError, match="Invalid file extension"):
            profile.accept("images", [image(name="invoice.pdf", size=11)])


class FakeFiles(dict):

    def getlist(self, name):
        return self.get(name)


class TestCollect:

    def test_collects_named_field(self):
        request = SimpleNamespace(files=FakeFiles(images=[image(), image("b.png", "image/png")]))

        accepted = PRODUCT_IMAGES.collect(request, "images")

        assert [f.field for f in accepted] == ["images", "images"]
        assert [f.name for f in accepted] == ["photo.jpg", "b.png"]

    def test_missing_field_or_no_files(self):
        assert PRODUCT_IMAGES.collect(SimpleNamespace(files=FakeFiles()), "images") == []
        assert PRODUCT_IMAGES.collect(SimpleNamespace(files=None), "images") == []

    def test_collect_applies_limits(self):
        request = SimpleNamespace(files=FakeFiles(images=[image()] * 11))

        with pytest.raises(ValidationError) as exc_info:
            PRODUCT_IMAGES.collect(request, "images")

        assert exc_info.value.error_code == "LIMIT_FILE_COUNT"

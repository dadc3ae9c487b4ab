"""
Upload Handling
Memory-storage upload profiles for product images and chat attachments

Files are kept in memory as bytes; nothing touches the disk here.

Usage:
    files = PRODUCT_IMAGES.collect(request, 'images')
    for f in files:
        await image_service.store(f.name, f.body)
"""
import os
from dataclasses import dataclass
from typing import Iterable, List, Optional
from sanic import Request
from storefront import defaults
from storefront.exceptions import PayloadTooLargeError, ValidationError


@dataclass
class UploadedFile:
    """An accepted upload held in memory"""
    field: str
    name: str
    mime_type: str
    body: bytes

    @property
    def size(self) -> int:
        return len(self.body)

    @property
    def extension(self) -> str:
        return os.path.splitext(self.name)[1].lower()


class UploadProfile:
    """
    Size, count and type limits for one kind of upload

    The type filter checks the extension first, then the MIME type the
    client declared.
    """

    def __init__(
        self,
        name: str,
        max_file_size: int,
        max_files: int,
        allowed_extensions: Iterable[str] = None,
        allowed_mime_types: Iterable[str] = None
    ):
        self.name = name
        self.max_file_size = max_file_size
        self.max_files = max_files
        self.allowed_extensions = {
            e.lower() for e in (allowed_extensions or defaults.DEFAULT_UPLOAD_ALLOWED_EXTENSIONS)
        }
        self.allowed_mime_types = {
            m.lower() for m in (allowed_mime_types or defaults.DEFAULT_UPLOAD_ALLOWED_MIME_TYPES)
        }

    def filter_file(self, name: str, mime_type: Optional[str]) -> None:
        """
        Accept or reject a file by name and declared MIME type

        Raises:
            ValidationError: extension or MIME type not allowed
        """
        ext = os.path.splitext(name or '')[1].lower()
        if ext not in self.allowed_extensions:
            raise ValidationError(
                "Invalid file extension",
                errors={'file': f"Allowed extensions: {', '.join(sorted(self.allowed_extensions))}"}
            )

        if (mime_type or '').lower() not in self.allowed_mime_types:
            raise ValidationError(
                "Invalid MIME type",
                errors={'file': f"Allowed types: {', '.join(sorted(self.allowed_mime_types))}"}
            )

    def check_size(self, name: str, size: int) -> None:
        if size > self.max_file_size:
            raise PayloadTooLargeError(
                f"File {name} exceeds the {self.max_file_size // (1024 * 1024)}MB limit"
            )

    def check_count(self, count: int) -> None:
        if count > self.max_files:
            raise ValidationError(
                f"Too many files, at most {self.max_files} allowed",
                code='LIMIT_FILE_COUNT'
            )

    def accept(self, field: str, files: list) -> List[UploadedFile]:
        """
        Validate Sanic File objects and return them as UploadedFile

        Count is checked before any file is inspected.
        """
        self.check_count(len(files))

        accepted = []
        for f in files:
            self.filter_file(f.name, f.type)
            self.check_size(f.name, len(f.body))
            accepted.append(UploadedFile(field=field, name=f.name, mime_type=f.type, body=f.body))
        return accepted

    def collect(self, request: Request, field: str) -> List[UploadedFile]:
        """Collect the files posted under `field` from a multipart request"""
        files = request.files.getlist(field) if request.files else []
        return self.accept(field, files or [])

    def __repr__(self) -> str:
        return f"<UploadProfile {self.name} max_size={self.max_file_size} max_files={self.max_files}>"


PRODUCT_IMAGES = UploadProfile(
    'product_images',
    max_file_size=defaults.DEFAULT_PRODUCT_IMAGE_MAX_SIZE,
    max_files=defaults.DEFAULT_PRODUCT_IMAGE_MAX_FILES,
)

CHAT_ATTACHMENTS = UploadProfile(
    'chat_attachments',
    max_file_size=defaults.DEFAULT_CHAT_ATTACHMENT_MAX_SIZE,
    max_files=defaults.DEFAULT_CHAT_ATTACHMENT_MAX_FILES,
)

# Product create/update forms: images alongside the regular form fields
PRODUCT_FORM_DATA = UploadProfile(
    'product_form_data',
    max_file_size=defaults.DEFAULT_PRODUCT_IMAGE_MAX_SIZE,
    max_files=defaults.DEFAULT_PRODUCT_IMAGE_MAX_FILES,
)

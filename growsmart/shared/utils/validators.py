# 📄 File: growsmart/shared/utils/validators.py
# 🧭 Purpose (Layman Explanation):
# This file contains checkers that make sure uploaded plant photos are real pictures
# and not too big before we send them off to the identification service.
# 🧪 Purpose (Technical Summary):
# Image upload validation: size limits, Pillow-based integrity verification and
# MIME-type detection used to build the base64 data URL sent to Plant.id.
# 🔗 Dependencies:
# PIL (Pillow) for image verification, io, typing
# 🔄 Connected Modules / Calls From:
# Plant identification endpoint, Python plant-scan client

import io
from typing import List, Optional

from PIL import Image, UnidentifiedImageError

from growsmart.shared.core.exceptions import FileTooLargeError, InvalidFileTypeError

# File validation constants
MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10MB
ALLOWED_IMAGE_FORMATS = {'JPEG', 'PNG', 'WEBP', 'GIF', 'BMP', 'TIFF'}
DEFAULT_IMAGE_MIME = 'image/jpeg'


class ValidationResult:
    """Result object for validation operations"""
    def __init__(self, is_valid: bool, errors: List[str] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: str):
        """Add validation error"""
        self.errors.append(error)
        self.is_valid = False


def validate_image_size(
    file_size: int,
    max_size: int = MAX_IMAGE_SIZE,
    filename: Optional[str] = None,
) -> None:
    """
    Enforce the upload size limit.

    Args:
        file_size: Size of the upload in bytes
        max_size: Largest accepted size in bytes
        filename: Original filename, reported in the error details

    Raises:
        FileTooLargeError: If the image is larger than max_size
    """
    if file_size > max_size:
        max_mb = max_size // (1024 * 1024)
        raise FileTooLargeError(
            message=f"Please select an image smaller than {max_mb}MB",
            max_size_mb=max_mb,
            actual_size_mb=round(file_size / (1024 * 1024), 2),
            filename=filename,
        )


def check_image_bytes(image_data: bytes) -> ValidationResult:
    """
    Check that bytes decode as a supported image.

    Args:
        image_data: Raw uploaded bytes

    Returns:
        ValidationResult with validation status and errors
    """
    result = ValidationResult(True)

    if not image_data:
        result.add_error("Image is empty")
        return result

    try:
        with Image.open(io.BytesIO(image_data)) as img:
            img.verify()
            if img.format not in ALLOWED_IMAGE_FORMATS:
                result.add_error(f"Image format '{img.format}' is not supported")
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        result.add_error(f"File is not a valid image: {e}")

    return result


def detect_image_mime(image_data: bytes, filename: Optional[str] = None) -> str:
    """
    Validate image bytes and return their MIME type.

    Args:
        image_data: Raw uploaded bytes
        filename: Original filename, reported in the error details

    Returns:
        str: MIME type such as 'image/png'

    Raises:
        InvalidFileTypeError: If Pillow cannot read the bytes as a supported image
    """
    result = check_image_bytes(image_data)
    if not result.is_valid:
        raise InvalidFileTypeError(
            message="Uploaded file is not a valid image",
            filename=filename,
            expected_types=sorted(ALLOWED_IMAGE_FORMATS),
            details={"errors": result.errors},
        )

    with Image.open(io.BytesIO(image_data)) as img:
        return Image.MIME.get(img.format, DEFAULT_IMAGE_MIME)

"""
Image upload handling for portfolio entries.
"""

import os
import logging
import time
from typing import Optional

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from shining_star.exceptions import ValidationFailed

logger = logging.getLogger(__name__)


def allowed_file(filename: str) -> bool:
    """Check the extension against ALLOWED_EXTENSIONS."""
    return (
        '.' in filename
        and filename.rsplit('.', 1)[1].lower() in current_app.config['ALLOWED_EXTENSIONS']
    )


def save_image(file: Optional[FileStorage], field_name: str) -> Optional[str]:
    """
    Store an uploaded image under UPLOAD_FOLDER.

    Args:
        file: Uploaded file, or None
        field_name: Form field, used in error messages

    Returns:
        Stored filename, or None when nothing was uploaded

    Raises:
        ValidationFailed: file type not allowed
    """
    if file is None or not file.filename:
        return None

    if not allowed_file(file.filename):
        raise ValidationFailed([f"{field_name} must be a jpg, jpeg, png or gif image"])

    upload_folder = current_app.config['UPLOAD_FOLDER']
    os.makedirs(upload_folder, exist_ok=True)

    filename = f"{int(time.time() * 1000)}-{secure_filename(file.filename)}"
    file.save(os.path.join(upload_folder, filename))
    logger.info(f"Saved portfolio image: {filename}")
    return filename


def remove_image(filename: Optional[str]) -> None:
    """Delete a stored image; a missing file is only logged."""
    if not filename:
        return
    path = os.path.join(current_app.config['UPLOAD_FOLDER'], os.path.basename(filename))
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning(f"Portfolio image already gone: {path}")

"""UI event handlers organized by feature area.

- generation: Style transform, background removal and action locking
- upload: Image upload and validation
"""

from .generation import (
    format_error,
    generate_image,
    lock_actions,
    remove_background,
    unlock_actions,
)
from .upload import upload_image

__all__ = [
    "format_error",
    "generate_image",
    "lock_actions",
    "remove_background",
    "unlock_actions",
    "upload_image",
]

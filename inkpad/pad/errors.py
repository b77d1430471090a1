class UnsupportedImageFormat(ValueError):
    """Raised when an export is requested in an encoding the pad cannot produce."""

    def __init__(self, mime_type: str):
        super().__init__(f"Unsupported image format: {mime_type}")
        self.mime_type = mime_type


class ImageRestoreError(Exception):
    """Handed to the restore callback when an image could not be decoded or drawn."""

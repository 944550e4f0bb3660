"""Infrastructure helpers shared by the domain and adapters."""

from workrobot.infrastructure.bounded_reader import MAX_IMAGE_FILE_SIZE, BoundedReader, read_bounded

__all__ = ["MAX_IMAGE_FILE_SIZE", "BoundedReader", "read_bounded"]

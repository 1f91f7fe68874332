"""Content staging pipeline."""

from .pipeline import (
    DEFAULT_TAG,
    IMAGE_EXTENSIONS,
    IMAGES_DIR,
    NOTES_DIR,
    REPO_DIR,
    ContentStager,
    StagingError,
)
from .summary import markdown_to_text, summarize

__all__ = [
    "DEFAULT_TAG",
    "IMAGES_DIR",
    "IMAGE_EXTENSIONS",
    "NOTES_DIR",
    "REPO_DIR",
    "ContentStager",
    "StagingError",
    "markdown_to_text",
    "summarize",
]

"""
Scope-checked operations for Delta Storage.
"""

from delta_storage.services.directory_service import DirectoryService
from delta_storage.services.file_service import FileService

__all__ = [
    "DirectoryService",
    "FileService",
]

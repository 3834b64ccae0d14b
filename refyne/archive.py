"""
Extraction of uploaded project archives.
"""

import os
import zipfile
import logging

from .exceptions import ArchiveError
from .utils import ensure_dir

logger = logging.getLogger(__name__)

ZIP_SIGNATURE = b"PK"


def looks_like_zip(file_path) -> bool:
    """Check the PK signature at the start of a file."""
    try:
        with open(file_path, "rb") as f:
            return f.read(2) == ZIP_SIGNATURE
    except OSError:
        return False

def _is_within(directory: str, target: str) -> bool:
    directory = os.path.realpath(directory)
    target = os.path.realpath(target)
    return os.path.commonpath([directory, target]) == directory

def extract_archive(zip_path, dest_dir) -> str:
    """
    Extract a ZIP archive into `dest_dir`.

    Args:
        zip_path: Path of the uploaded archive.
        dest_dir: Target directory; created if missing.

    Returns:
        str: The destination directory.

    Raises:
        ArchiveError: if the file is not a ZIP, is empty, or has members that
            would land outside `dest_dir`.
    """
    if not looks_like_zip(zip_path):
        raise ArchiveError("File is not a valid ZIP archive")

    ensure_dir(dest_dir)
    try:
        with zipfile.ZipFile(zip_path, "r") as zip_ref:
            members = zip_ref.infolist()
            if not members:
                raise ArchiveError("ZIP file is empty")
            for member in members:
                if not _is_within(dest_dir, os.path.join(dest_dir, member.filename)):
                    raise ArchiveError("Archive entry escapes the extraction directory",
                                       {"entry": member.filename})
            zip_ref.extractall(dest_dir)
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Invalid ZIP file format: {e}") from e
    except zipfile.LargeZipFile as e:
        raise ArchiveError("ZIP file is too large (requires ZIP64 support)") from e

    logger.info("Extracted %s -> %s", zip_path, dest_dir)
    return str(dest_dir)

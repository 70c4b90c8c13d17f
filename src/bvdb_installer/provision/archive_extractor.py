"""ArchiveExtractor: unpacks the gzip-compressed setup tarball."""

import gzip
import os
import re
import shutil
import tarfile

from bvdb_installer.provision.errors import ExtractError
from bvdb_installer.provision.path_ops import ensure_dir, remove_tree


def intermediate_tar_path(archive_path):
    """Return the path of the decompressed tar written next to the archive."""
    if archive_path.endswith(".gz"):
        return re.sub(r"\.gz$", "", archive_path)
    return archive_path + ".tar"


def extract_tar_gz(archive_path, destination):
    """Decompress archive_path and unpack it into a freshly emptied destination.

    Args:
        archive_path: Path to the downloaded .tar.gz file
        destination: Directory to unpack into; existing contents are removed

    Returns:
        Path of the intermediate .tar file, for later cleanup

    Raises:
        ExtractError: If the archive is missing, corrupt, or unsafe to unpack
    """
    if not os.path.isfile(archive_path):
        raise ExtractError(f"Setup archive not found: {archive_path}")
    if not hasattr(tarfile, "data_filter"):
        raise ExtractError(
            "This Python has no tarfile extraction filters; use 3.12+, 3.11.4+ or 3.10.12+."
        )

    remove_tree(destination)
    ensure_dir(destination)

    tar_path = intermediate_tar_path(archive_path)
    try:
        if os.path.lexists(tar_path):
            os.unlink(tar_path)
        _decompress(archive_path, tar_path)
        with tarfile.open(tar_path, mode="r:") as tar:
            tar.extractall(destination, filter="data")
    except (OSError, EOFError, tarfile.TarError) as err:
        raise ExtractError(f"Failed to extract setup archive: {err}") from err

    return tar_path


def _decompress(archive_path, tar_path):
    with gzip.open(archive_path, "rb") as src, open(tar_path, "wb") as dst:
        shutil.copyfileobj(src, dst)

"""Helpers that build setup archives and project trees for tests."""

import gzip
import io
import os
import tarfile


def make_tar_gz(files):
    """Return gzip-compressed tar bytes containing files (relative path -> text)."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w") as tar:
        for name, text in files.items():
            data = text.encode("utf-8")
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return gzip.compress(buffer.getvalue())


def write_tar_gz(path, files):
    with open(path, "wb") as f:
        f.write(make_tar_gz(files))
    return path


def write_file(path, text):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    return path


def read_file(path):
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()

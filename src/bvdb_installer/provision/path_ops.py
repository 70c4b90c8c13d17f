"""Filesystem primitives: directory creation, recursive copy and delete.

Copy walks parents before children; delete walks children before parents.
Both walks share _iter_entries, which scopes each directory iterator.
"""

import os
import shutil


def ensure_dir(path):
    """Create path (and missing parents) if it is not already a directory."""
    if os.path.isdir(path):
        return
    os.makedirs(path, mode=0o755, exist_ok=True)


def _iter_entries(directory):
    with os.scandir(directory) as entries:
        return sorted(
            ((entry.path, entry.is_dir(follow_symlinks=False)) for entry in entries),
        )


def walk_pre_order(root):
    """Yield (path, is_dir) for everything below root, parents first."""
    for path, is_dir in _iter_entries(root):
        yield path, is_dir
        if is_dir:
            yield from walk_pre_order(path)


def walk_post_order(root):
    """Yield (path, is_dir) for everything below root, children first."""
    for path, is_dir in _iter_entries(root):
        if is_dir:
            yield from walk_post_order(path)
        yield path, is_dir


def backup_existing(destination):
    """Rename an existing non-directory destination to <destination>.bak.

    Returns the backup path, or None when there was nothing to back up.
    """
    if not os.path.lexists(destination) or os.path.isdir(destination):
        return None
    backup = destination + ".bak"
    os.replace(destination, backup)
    return backup


def copy_file(source, destination):
    """Copy one file, backing up a conflicting destination first.

    Returns the backup path or None.
    """
    ensure_dir(os.path.dirname(destination))
    backup = backup_existing(destination)
    shutil.copyfile(source, destination)
    shutil.copymode(source, destination)
    return backup


def copy_tree(source, destination):
    """Recreate the source directory tree under destination.

    Returns the list of backup paths created for overwritten files.
    """
    backups = []
    ensure_dir(destination)
    for path, is_dir in walk_pre_order(source):
        target = os.path.join(destination, os.path.relpath(path, source))
        if is_dir:
            ensure_dir(target)
            continue
        backup = copy_file(path, target)
        if backup:
            backups.append(backup)
    return backups


def copy_path(source, destination):
    """Copy a file or a directory tree to destination."""
    if os.path.isdir(source):
        return copy_tree(source, destination)
    backup = copy_file(source, destination)
    return [backup] if backup else []


def remove_tree(directory):
    """Delete directory and everything below it. Missing directories are ignored.

    A symlink is removed itself; its target is left alone.
    """
    if os.path.islink(directory):
        os.unlink(directory)
        return
    if not os.path.isdir(directory):
        return
    for path, is_dir in walk_post_order(directory):
        if is_dir:
            os.rmdir(path)
        else:
            os.unlink(path)
    os.rmdir(directory)


def remove_quietly(path):
    """Best-effort removal of a file or directory tree.

    Returns True if the path is gone afterwards.
    """
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            remove_tree(path)
        elif os.path.lexists(path):
            os.unlink(path)
    except OSError:
        return False
    return not os.path.lexists(path)

"""Line-oriented find-and-replace for foreign config formats (PHP config, .env).

Files are treated as plain text: a line either matches and is replaced as a
whole, or it is written back untouched. Nothing here parses PHP or dotenv.
"""

import os
import re
import shutil
import tempfile

SECURITY_BEGIN = "# BEGIN SECURITY"
SECURITY_END = "# END SECURITY"

# Bytes that are not valid UTF-8 round-trip unchanged through read_text and atomic_write.
ENCODING_ERRORS = "surrogateescape"

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")


def read_text(file_path: str) -> str:
    with open(file_path, "r", encoding="utf-8", errors=ENCODING_ERRORS, newline="") as f:
        return f.read()


def split_lines(text):
    """Split text on \\n only, keeping line endings."""
    return _LINE_RE.findall(text)


def atomic_write(file_path: str, content: str) -> None:
    """Write content to file atomically using temp file + rename, keeping its mode."""
    dir_name = os.path.dirname(os.path.abspath(file_path))
    fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', errors=ENCODING_ERRORS, newline='') as f:
            f.write(content)
        if os.path.exists(file_path):
            shutil.copymode(file_path, tmp_path)
        os.replace(tmp_path, file_path)
    except Exception:
        os.unlink(tmp_path)
        raise


def _split_eol(line):
    body = line.rstrip("\r\n")
    return body, line[len(body):]


def _replace_first_line(text, predicate, new_line):
    """Replace the first line whose body satisfies predicate.

    new_line replaces the line body; the original line ending is kept.
    Returns (updated_text, replaced).
    """
    lines = split_lines(text)
    for index, line in enumerate(lines):
        body, eol = _split_eol(line)
        if predicate(body):
            lines[index] = new_line + eol
            return "".join(lines), True
    return text, False


def _append_line(text, new_line):
    stripped = text.rstrip()
    if not stripped:
        return new_line + "\n"
    return stripped + "\n" + new_line + "\n"


def replace_assignment(file_path: str, pattern: str, replacement_line: str) -> bool:
    """Replace the first line matching the regex pattern with replacement_line.

    Returns False (file untouched) when no line matches.
    """
    regex = re.compile(pattern)
    text = read_text(file_path)
    updated, replaced = _replace_first_line(
        text, lambda body: regex.search(body) is not None, replacement_line,
    )
    if not replaced:
        return False
    atomic_write(file_path, updated)
    return True


def set_key_value(file_path: str, key: str, value: str) -> bool:
    """Set KEY=value, replacing the first KEY= line or appending a new one.

    Returns True if an existing line was replaced, False if one was appended.
    """
    line = f"{key}={value}"
    prefix = f"{key}="
    text = read_text(file_path)
    updated, replaced = _replace_first_line(text, lambda body: body.startswith(prefix), line)
    if not replaced:
        updated = _append_line(text, line)
    atomic_write(file_path, updated)
    return replaced


def inject_marker(file_path: str, marker: str, content: str) -> bool:
    """Replace the first line containing marker with content.

    The content is trimmed of trailing whitespace and newline-terminated.
    When no line contains the marker the content is appended instead.

    Returns True if a marker line was replaced, False if content was appended.

    Raises:
        ValueError: If content is blank
    """
    block = content.rstrip()
    if not block:
        raise ValueError(f"No content to inject for marker {marker}")

    text = read_text(file_path)
    lines = split_lines(text)
    for index, line in enumerate(lines):
        if marker in line:
            lines[index] = block + "\n"
            atomic_write(file_path, "".join(lines))
            return True

    atomic_write(file_path, _append_line(text, block))
    return False


def strip_block(file_path: str, begin_marker: str = SECURITY_BEGIN, end_marker: str = SECURITY_END) -> bool:
    """Remove every span from a begin_marker line through the next end_marker line.

    A begin marker without a matching end marker is left in place. The
    remaining text is stripped and ends with a single newline.

    Returns True if at least one block was removed.
    """
    text = read_text(file_path)
    kept = []
    pending = []
    removed = False
    for line in split_lines(text):
        if pending:
            pending.append(line)
            if line.startswith(end_marker):
                pending = []
                removed = True
            continue
        if line.startswith(begin_marker):
            pending = [line]
            continue
        kept.append(line)
    kept.extend(pending)

    if not removed:
        return False
    atomic_write(file_path, "".join(kept).strip() + "\n")
    return True


def replace_string(file_path: str, search: str, replacement: str) -> int:
    """Replace every literal occurrence of search. Returns the replacement count."""
    if not search:
        raise ValueError("Search string must not be empty")
    text = read_text(file_path)
    count = text.count(search)
    if count:
        atomic_write(file_path, text.replace(search, replacement))
    return count

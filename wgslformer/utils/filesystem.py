# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Filesystem helpers for tokenizer and vocabulary artifacts.

Writes are atomic: content goes to a sibling temp file that is renamed
over the target once it is complete. Readers of tokenizer.json therefore
see either the old document or the new one.
"""

import os
import tempfile
from pathlib import Path

_TEMP_PREFIX = ".wgslformer_tmp_"


def atomic_write(target_path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Replace ``target_path`` with ``content``, creating parent directories.

    The temp file is created in the target's own directory so the rename
    never crosses filesystems.

    Raises:
        OSError: If writing or renaming fails.
        UnicodeEncodeError: If ``content`` can't be encoded. In both cases
            the target keeps its previous content and the temp file is removed.
    """
    directory = target_path.parent
    directory.mkdir(parents=True, exist_ok=True)

    fd, temp_name = tempfile.mkstemp(prefix=_TEMP_PREFIX, suffix=".tmp", dir=str(directory))
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
        temp_path.replace(target_path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def safe_read(file_path: Path, encoding: str = "utf-8") -> str:
    """
    Read a whole text file.

    Raises:
        FileNotFoundError: Nothing exists at ``file_path``.
        IsADirectoryError: ``file_path`` is a directory.
    """
    if file_path.is_dir():
        raise IsADirectoryError(f"{file_path} is a directory, expected a file")
    if not file_path.exists():
        raise FileNotFoundError(f"No such file: {file_path}")
    return file_path.read_text(encoding=encoding)

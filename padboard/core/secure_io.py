"""Owner-only file system helpers for clipboard storage."""

import os
import stat
from pathlib import Path

# Owner-only directory (0o700)
SECURE_DIR_MODE: int = stat.S_IRWXU

# Owner read/write file (0o600)
SECURE_FILE_MODE: int = stat.S_IRUSR | stat.S_IWUSR


def secure_mkdir(path: Path, parents: bool = True) -> None:
    """Create a directory readable only by its owner.

    Missing parents are created with the same mode when parents=True.
    Existing directories are re-chmodded so the final mode is always 0o700.

    Args:
        path: Directory path to create.
        parents: If True, create parent directories as needed.
    """
    if parents:
        for parent in reversed(list(path.parents)):
            if not parent.exists():
                parent.mkdir(mode=SECURE_DIR_MODE)
                os.chmod(parent, SECURE_DIR_MODE)

    if not path.exists():
        path.mkdir(mode=SECURE_DIR_MODE)

    os.chmod(path, SECURE_DIR_MODE)


def secure_touch(path: Path) -> None:
    """Create an empty 0o600 file if it does not exist yet.

    Uses O_CREAT | O_EXCL so the file never exists with looser permissions.
    """
    if path.exists():
        return
    fd = os.open(
        str(path),
        os.O_CREAT | os.O_EXCL | os.O_WRONLY,
        SECURE_FILE_MODE,
    )
    os.close(fd)

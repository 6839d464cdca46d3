"""Scoped temporary workspace for transient key material."""

import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .errors import WorkspaceError
from .logging_config import LOGGER
from .models import CertificateMaterial


@contextmanager
def scoped_workspace(prefix: str, parent: Path | None = None) -> Iterator[Path]:
    """Create a private temporary directory and remove it on exit.

    The directory is created with mode 0700 and removed recursively whether
    the body returns or raises. A failed removal is logged and does not
    replace the body's result or exception.

    Args:
        prefix: Directory name prefix
        parent: Directory to create the workspace in (system temp dir if None)

    Yields:
        Path to the workspace directory

    Raises:
        WorkspaceError: If the directory cannot be created
    """
    try:
        path = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))
    except OSError as e:
        raise WorkspaceError(f"failed to create workspace: {e}") from e

    LOGGER.debug("Created workspace %s", path)
    try:
        yield path
    finally:
        try:
            shutil.rmtree(path)
        except OSError as e:
            LOGGER.warning("Failed to remove workspace %s: %s", path, e)


def read_material(key_path: Path, cert_path: Path) -> CertificateMaterial:
    """Read key and certificate written by an external tool.

    Raises:
        WorkspaceError: If either file is missing or not valid UTF-8
    """
    try:
        key = key_path.read_text(encoding="utf-8")
        cert = cert_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise WorkspaceError(f"failed to read issued key/certificate: {e}") from e

    return CertificateMaterial(key=key, cert=cert)

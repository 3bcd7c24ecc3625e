"""Jar archive writer.

A jar is a zip archive whose first entry is META-INF/MANIFEST.MF.
"""

import logging
import zipfile
from pathlib import Path
from typing import Dict

from .. import constants
from ..errors import PackagingFailure

logger = logging.getLogger(__name__)


def build_manifest(created_by: str = "implgen") -> str:
    return (
        f"Manifest-Version: {constants.MANIFEST_VERSION}\r\n"
        f"Created-By: {created_by}\r\n"
        "\r\n"
    )


class JarWriter:
    def write(self, jar_path: Path, entries: Dict[str, Path]) -> None:
        """Write jar_path containing the manifest and the given entries.

        Args:
            jar_path: Archive to create (overwritten if present)
            entries: Archive entry name ("com/example/FooImpl.class") -> file

        Raises:
            PackagingFailure: If a class file is missing or the archive
                cannot be written
        """
        try:
            with zipfile.ZipFile(jar_path, "w", compression=zipfile.ZIP_DEFLATED) as jar:
                jar.writestr(constants.MANIFEST_PATH, build_manifest())
                for name, source in entries.items():
                    jar.write(source, arcname=name)
        except OSError as e:
            raise PackagingFailure(f"Error during a jar file writing: {e}") from e

        logger.debug(f"Wrote {jar_path} with {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}")

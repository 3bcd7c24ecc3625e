"""Jar packaging of generated implementations.

Orchestrates: generate source in a scratch directory -> javac -> jar.
The scratch directory is removed on every exit path.
"""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional, Sequence, Union

from ..constants import CLASS_FILE_SUFFIX, SCRATCH_DIR_PREFIX
from ..errors import ImplementorArgumentError, PackagingFailure
from ..generator.implementor import Implementor
from .jar_writer import JarWriter
from .javac_bridge import JavacBridge

logger = logging.getLogger(__name__)


@contextmanager
def scratch_directory(parent: Path) -> Iterator[Path]:
    """Create a temporary directory under parent and always remove it."""
    try:
        work_dir = Path(tempfile.mkdtemp(prefix=SCRATCH_DIR_PREFIX, dir=parent))
    except OSError as e:
        raise PackagingFailure(f"Error during creating a temporary directory: {e}") from e

    try:
        yield work_dir
    finally:
        shutil.rmtree(work_dir, ignore_errors=True)
        if work_dir.exists():
            logger.warning(f"Error during deleting temporary files in '{work_dir}'")


class JarImplementor:
    """Implementor that can also compile and package its output."""

    def __init__(
        self,
        implementor: Implementor,
        javac: Optional[JavacBridge] = None,
        jar_writer: Optional[JarWriter] = None,
        classpath: Sequence[str] = (),
        bundle_contract_classes: bool = False,
    ):
        self.implementor = implementor
        self.javac = javac or JavacBridge()
        self.jar_writer = jar_writer or JarWriter()
        self.classpath = list(classpath)
        self.bundle_contract_classes = bundle_contract_classes

    @classmethod
    def from_settings(cls, settings) -> "JarImplementor":
        return cls(
            Implementor.from_settings(settings),
            javac=JavacBridge(settings.javac, timeout=settings.javac_timeout),
            classpath=settings.classpath,
            bundle_contract_classes=settings.bundle_contract_classes,
        )

    def implement(self, type_name: str, root: Union[str, Path]) -> Path:
        return self.implementor.implement(type_name, root)

    def implement_jar(self, type_name: str, jar_path: Union[str, Path]) -> Path:
        """Generate, compile and package the implementation of type_name.

        Returns:
            Path of the written jar

        Raises:
            ImplementorError: Any generation, compilation or packaging failure;
                no jar is left behind
        """
        if type_name is None or jar_path is None:
            raise ImplementorArgumentError("Non null arguments expected")

        jar_path = Path(jar_path).absolute()
        try:
            jar_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PackagingFailure(f"Error during creating directories: {e}") from e

        with scratch_directory(jar_path.parent) as work_dir:
            source_file = self.implementor.implement(type_name, work_dir)
            self.javac.compile(
                source_file,
                work_dir,
                classpath=self.classpath,
                source_roots=self.implementor.index.source_roots,
            )

            class_entry = source_file.relative_to(work_dir).with_suffix(CLASS_FILE_SUFFIX).as_posix()
            entries = self._entries(work_dir, class_entry)
            try:
                self.jar_writer.write(jar_path, entries)
            except PackagingFailure:
                jar_path.unlink(missing_ok=True)
                raise

        logger.info(f"Packaged {class_entry} into {jar_path}")
        return jar_path

    def _entries(self, work_dir: Path, class_entry: str) -> Dict[str, Path]:
        """Implementation class first, then every other class if bundling."""
        class_file = work_dir / class_entry
        if not class_file.is_file():
            raise PackagingFailure(f"Compiled class not found: {class_entry}")

        entries = {class_entry: class_file}
        if self.bundle_contract_classes:
            for path in sorted(work_dir.rglob("*" + CLASS_FILE_SUFFIX)):
                entries.setdefault(path.relative_to(work_dir).as_posix(), path)
        return entries

"""javac subprocess bridge.

Compiles generated sources with the JDK compiler found on PATH (or the
executable named in settings). Every failure mode surfaces as
CompilationFailure carrying the compiler's diagnostics.
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Sequence

from ..errors import CompilationFailure

logger = logging.getLogger(__name__)


class JavacBridge:
    """Bridge to the javac CLI."""

    def __init__(self, javac: str = "javac", timeout: int = 120):
        self.javac = javac
        self.timeout = timeout

    def is_available(self) -> bool:
        return shutil.which(self.javac) is not None

    def build_command(
        self,
        source_file: Path,
        output_dir: Path,
        classpath: Sequence[str] = (),
        source_roots: Sequence[Path] = (),
    ) -> List[str]:
        cmd = [
            self.javac,
            "-encoding", "UTF-8",
            "-d", str(output_dir),
            "-cp", os.pathsep.join([str(output_dir), *classpath]),
        ]
        if source_roots:
            cmd += ["-sourcepath", os.pathsep.join(str(root) for root in source_roots)]
        cmd.append(str(source_file))
        return cmd

    def compile(
        self,
        source_file: Path,
        output_dir: Path,
        classpath: Sequence[str] = (),
        source_roots: Sequence[Path] = (),
    ) -> None:
        """Compile one source file into output_dir.

        Raises:
            CompilationFailure: If javac is missing, times out or exits non-zero
        """
        cmd = self.build_command(source_file, output_dir, classpath, source_roots)
        logger.debug(f"Running {' '.join(cmd)}")

        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise CompilationFailure(f"No java compiler found: {self.javac}") from e
        except subprocess.TimeoutExpired as e:
            raise CompilationFailure(
                f"Java compiler timed out after {self.timeout}s compiling {source_file}"
            ) from e

        if proc.returncode != 0:
            diagnostics = (proc.stderr or proc.stdout or "").strip()
            logger.debug(f"javac failed (exit {proc.returncode}): {diagnostics[:500]}")
            raise CompilationFailure(
                f"Error during compiling {source_file} (exit {proc.returncode})",
                diagnostics=diagnostics,
            )

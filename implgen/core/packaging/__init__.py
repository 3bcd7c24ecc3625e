# Jar packaging: javac subprocess bridge and archive writer.
# Only needed for the -jar mode; plain source generation never
# touches the compiler.

from .jar_implementor import JarImplementor, scratch_directory
from .jar_writer import JarWriter
from .javac_bridge import JavacBridge

__all__ = ["JarImplementor", "JarWriter", "JavacBridge", "scratch_directory"]

"""Shared constants for implgen.

Java language facts used by introspection, resolution and rendering.
"""

# =============================================================================
# Hierarchy
# =============================================================================

# Every class hierarchy terminates here; its members are never scanned
ROOT_TYPE = "java.lang.Object"

# Subjects that can never be extended by generated code
FORBIDDEN_SUBJECTS = frozenset({
    "java.lang.Object",
    "java.lang.Enum",
    "java.lang.Record",
})

# =============================================================================
# Generated code
# =============================================================================

DEFAULT_CLASS_SUFFIX = "Impl"
SOURCE_FILE_SUFFIX = ".java"
CLASS_FILE_SUFFIX = ".class"
INDENT = "    "

# Modifiers never copied onto a generated member
STRIPPED_MODIFIERS = frozenset({"abstract", "native", "transient", "default"})

# Canonical modifier order (java.lang.reflect.Modifier.toString)
MODIFIER_ORDER = (
    "public",
    "protected",
    "private",
    "abstract",
    "static",
    "final",
    "transient",
    "volatile",
    "synchronized",
    "native",
    "strictfp",
)

VISIBILITY_MODIFIERS = frozenset({"public", "protected", "private"})

# =============================================================================
# Types
# =============================================================================

PRIMITIVE_TYPES = frozenset({
    "boolean",
    "byte",
    "char",
    "short",
    "int",
    "long",
    "float",
    "double",
})

VOID_TYPE = "void"

# java.lang types visible without an import
JAVA_LANG_TYPES = frozenset({
    "AbstractMethodError",
    "Appendable",
    "ArithmeticException",
    "ArrayIndexOutOfBoundsException",
    "AssertionError",
    "AutoCloseable",
    "Boolean",
    "Byte",
    "CharSequence",
    "Character",
    "Class",
    "ClassCastException",
    "ClassLoader",
    "ClassNotFoundException",
    "CloneNotSupportedException",
    "Cloneable",
    "Comparable",
    "Deprecated",
    "Double",
    "Enum",
    "Error",
    "Exception",
    "Float",
    "FunctionalInterface",
    "IllegalAccessException",
    "IllegalArgumentException",
    "IllegalStateException",
    "IndexOutOfBoundsException",
    "InstantiationException",
    "Integer",
    "InterruptedException",
    "Iterable",
    "Long",
    "Math",
    "NoSuchFieldException",
    "NoSuchMethodException",
    "NullPointerException",
    "Number",
    "NumberFormatException",
    "Object",
    "Override",
    "Process",
    "Readable",
    "Record",
    "ReflectiveOperationException",
    "Runnable",
    "RuntimeException",
    "SafeVarargs",
    "SecurityException",
    "Short",
    "StackOverflowError",
    "String",
    "StringBuffer",
    "StringBuilder",
    "SuppressWarnings",
    "System",
    "Thread",
    "ThreadLocal",
    "Throwable",
    "UnsupportedOperationException",
    "Void",
})

# =============================================================================
# Identifiers
# =============================================================================

JAVA_KEYWORDS = frozenset({
    "abstract", "assert", "boolean", "break", "byte", "case", "catch",
    "char", "class", "const", "continue", "default", "do", "double",
    "else", "enum", "extends", "final", "finally", "float", "for", "goto",
    "if", "implements", "import", "instanceof", "int", "interface", "long",
    "native", "new", "package", "private", "protected", "public", "return",
    "short", "static", "strictfp", "super", "switch", "synchronized",
    "this", "throw", "throws", "transient", "try", "void", "volatile",
    "while", "true", "false", "null", "_",
})

SYNTHETIC_PARAMETER_PREFIX = "arg"

# =============================================================================
# Packaging
# =============================================================================

MANIFEST_PATH = "META-INF/MANIFEST.MF"
MANIFEST_VERSION = "1.0"
SCRATCH_DIR_PREFIX = "implgen_"

# Common members of JDK packages, for names brought in by on-demand imports
# that no source root declares
KNOWN_JDK_PACKAGE_TYPES = {
    "java.io": frozenset({
        "BufferedReader", "BufferedWriter", "Closeable", "File",
        "FileNotFoundException", "Flushable", "IOException", "InputStream",
        "OutputStream", "PrintStream", "Reader", "Serializable",
        "UncheckedIOException", "Writer",
    }),
    "java.nio.file": frozenset({"Files", "Path", "Paths"}),
    "java.util": frozenset({
        "ArrayList", "Collection", "Collections", "Comparator", "Date",
        "Deque", "HashMap", "HashSet", "Iterator", "LinkedList", "List",
        "Locale", "Map", "NavigableMap", "NavigableSet", "NoSuchElementException",
        "Objects", "Optional", "Properties", "Queue", "Random", "Set",
        "SortedMap", "SortedSet", "TreeMap", "TreeSet", "UUID",
    }),
    "java.util.concurrent": frozenset({
        "Callable", "CompletableFuture", "ExecutionException", "Executor",
        "ExecutorService", "Future", "TimeUnit", "TimeoutException",
    }),
    "java.util.function": frozenset({
        "BiConsumer", "BiFunction", "BinaryOperator", "Consumer", "Function",
        "Predicate", "Supplier", "UnaryOperator",
    }),
    "java.util.stream": frozenset({"Collectors", "IntStream", "Stream"}),
}

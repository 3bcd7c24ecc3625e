import argparse
import logging
import os
import sys
from typing import List, Optional

import yaml
from pydantic import ValidationError

from .core.errors import CompilationFailure, ImplementorError
from .core.packaging import JarImplementor
from .setting import load_settings

logger = logging.getLogger(__name__)

USAGE_ERROR = 2


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging.

    Logs go to stderr so the generated artifacts and any piped stdout stay clean.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="implgen",
        description="Generate a stub implementation of an abstract Java class or interface",
        usage="%(prog)s [options] <type> <output-root>\n"
              "       %(prog)s [options] -jar <type> <jar-path>",
    )
    parser.add_argument(
        "targets",
        nargs="*",
        metavar="ARG",
        help="Fully qualified type name followed by the output root (or jar path with -jar)"
    )
    parser.add_argument(
        "-jar",
        dest="jar",
        action="store_true",
        help="Compile the generated class and package it into a jar"
    )
    parser.add_argument(
        "-s", "--source-path",
        action="append",
        default=None,
        help="Java source root to search for types (repeatable)"
    )
    parser.add_argument(
        "--classpath",
        type=str,
        default=None,
        help="Extra classpath for compiling in -jar mode"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML settings file (default: ./implgen.yaml if present)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for implgen."""
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    overrides = {}
    if args.source_path:
        overrides["source_roots"] = args.source_path
    if args.classpath:
        overrides["classpath"] = [p for p in args.classpath.split(os.pathsep) if p]
    if args.log_level:
        overrides["log_level"] = args.log_level
    if overrides:
        settings = settings.model_validate({**settings.model_dump(), **overrides})

    setup_logging(settings.log_level)

    if len(args.targets) != 2:
        print(
            "Expected 2 arguments for class implementing or -jar and 2 arguments for jar implementing",
            file=sys.stderr,
        )
        parser.print_usage(sys.stderr)
        return USAGE_ERROR

    type_name, output = args.targets
    logger.debug(f"Implementing {type_name} -> {output} (jar={args.jar})")

    try:
        implementor = JarImplementor.from_settings(settings)
        if args.jar:
            implementor.implement_jar(type_name, output)
        else:
            implementor.implement(type_name, output)
    except ImplementorError as e:
        print(str(e), file=sys.stderr)
        if isinstance(e, CompilationFailure) and e.diagnostics:
            print(e.diagnostics, file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

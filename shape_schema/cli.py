#!/usr/bin/env python3
"""
CLI for shape-schema.

This module provides command-line tools for generating JSON schemas from
Python record types (dataclasses, pydantic models, TypedDicts, NamedTuples)
and for inspecting the kind classification table.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from .core.errors import to_core_error
from .core.mapper import TypeMapper
from .core.kinds import describe_table
from .core.mapper_exceptions import TargetResolutionError
from .core.schema_ir import Schema
from .core.writer import dumps_document, schema_document, write_schema
from .settings import MapperSettings, get_settings

logger = logging.getLogger(__name__)


def resolve_target(target: str) -> Any:
    """Import ``module:attribute`` (attribute may be dotted) and return the object."""
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise TargetResolutionError(
            f"Invalid target '{target}'. Expected 'module:attribute'"
        )

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise TargetResolutionError(f"Cannot import module '{module_name}': {e}") from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise TargetResolutionError(
                f"Module '{module_name}' has no attribute '{attr_path}'"
            ) from e
    return obj


class GeneratorCLI:
    """CLI for generating JSON schemas from Python types."""

    def __init__(self, settings: Optional[MapperSettings] = None):
        self.settings = settings or get_settings()

    def load_settings(
        self,
        config_path: Optional[str] = None,
        max_depth: Optional[int] = None,
        indent: Optional[int] = None,
    ) -> MapperSettings:
        """Merge config file and command line overrides into the active settings."""
        if config_path:
            self.settings = MapperSettings.from_yaml(config_path, max_depth=max_depth, indent=indent)
        else:
            self.settings = get_settings(max_depth=max_depth, indent=indent)
        return self.settings

    def generate(self, target: str) -> Schema:
        """Resolve a target and build its schema."""
        obj = resolve_target(target)
        logger.debug("Resolved %s to %r", target, obj)
        mapper = TypeMapper(
            max_depth=self.settings.max_depth,
            tag_key=self.settings.tag_key,
            omit_option=self.settings.omit_option,
        )
        return mapper.load(obj)

    def run_generate(
        self,
        target: str,
        output_path: str = "-",
        with_metadata: bool = False,
    ) -> int:
        """Run generation and return exit code."""
        try:
            logger.info("Generating schema for: %s", target)
            schema = self.generate(target)

            title = target.rpartition(":")[2].rpartition(".")[2] if with_metadata else None
            if output_path == "-":
                print(dumps_document(schema_document(schema, title), self.settings.indent))
            else:
                path = write_schema(schema, Path(output_path), title=title, indent=self.settings.indent)
                logger.info("Wrote schema: %s", path)
            return 0

        except Exception as e:
            err = to_core_error(e, default_category="cli")
            print(f"Error: {err}", file=sys.stderr)
            return 1

    def list_kinds(self) -> int:
        """Print the kind classification table."""
        print("Kind classification:")
        for python_shape, kind in describe_table():
            print(f"  • {python_shape} -> {kind}")
        return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="shape-schema CLI for JSON schema generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the schema of a dataclass
  shape-schema generate myapp.models:Order

  # Write it to a file with $schema/title/description
  shape-schema generate myapp.models:Order --output schemas/order.json --with-metadata

  # Show how Python types are classified
  shape-schema kinds
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    generate_parser = subparsers.add_parser("generate", help="Generate a JSON schema")
    generate_parser.add_argument("target", help="Target as module:attribute (e.g., myapp.models:Order)")
    generate_parser.add_argument(
        "--output",
        dest="output_path",
        default="-",
        help="Output file path or '-' for stdout (default: stdout)",
    )
    generate_parser.add_argument("--indent", type=int, help="JSON indentation width")
    generate_parser.add_argument("--max-depth", type=int, help="Maximum type nesting depth")
    generate_parser.add_argument("--config", dest="config_path", help="YAML settings file")
    generate_parser.add_argument(
        "--with-metadata", action="store_true", help="Add $schema, title and description"
    )
    generate_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers.add_parser("kinds", help="Show the kind classification table")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = GeneratorCLI()

    if args.command == "kinds":
        return cli.list_kinds()

    if args.command == "generate":
        if args.verbose:
            logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)
        try:
            cli.load_settings(args.config_path, args.max_depth, args.indent)
        except Exception as e:
            print(f"Error: {to_core_error(e, default_category='config')}", file=sys.stderr)
            return 1
        return cli.run_generate(args.target, args.output_path, args.with_metadata)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())

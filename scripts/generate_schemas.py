#!/usr/bin/env python3
"""
Generate JSON schemas for every target listed in a YAML manifest.

Manifest format:

    output_dir: schemas          # optional, relative to the manifest
    targets:
      order.json: myapp.models:Order
      customer.json: myapp.models:Customer

Failures are reported per target; the remaining targets are still generated.
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from shape_schema.cli import resolve_target
from shape_schema.core.errors import ConfigError, to_core_error
from shape_schema.core.mapper import TypeMapper
from shape_schema.core.writer import write_schema
from shape_schema.settings import MapperSettings, get_settings


def load_manifest(manifest_path: Path) -> Tuple[str, Dict[str, str]]:
    """Return the output directory and the ``filename -> target`` mapping of a manifest."""
    with open(manifest_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    targets = data.get("targets") if isinstance(data, dict) else None
    if not isinstance(targets, dict):
        raise ConfigError("Manifest must contain a 'targets' mapping", config_path=str(manifest_path))
    return str(data.get("output_dir", "schemas")), {str(k): str(v) for k, v in targets.items()}


def generate_schema(
    target: str, output_path: Path, settings: Optional[MapperSettings] = None
) -> None:
    """Generate the JSON schema for a target and save it to file."""
    settings = settings or get_settings()
    mapper = TypeMapper(
        max_depth=settings.max_depth, tag_key=settings.tag_key, omit_option=settings.omit_option
    )
    schema = mapper.load(resolve_target(target))
    title = target.rpartition(":")[2].rpartition(".")[2]
    write_schema(schema, output_path, title=title, indent=settings.indent)

    print(f"Generated schema: {output_path}")


def main(argv: Optional[List[str]] = None) -> int:
    """Generate all schemas listed in the manifest."""
    parser = argparse.ArgumentParser(description="Generate JSON schemas from a YAML manifest")
    parser.add_argument("manifest", help="Path to the YAML manifest")
    parser.add_argument("--output-dir", help="Override the manifest's output_dir")
    args = parser.parse_args(argv)

    manifest_path = Path(args.manifest)
    try:
        output_dir, targets = load_manifest(manifest_path)
    except (OSError, yaml.YAMLError, ConfigError) as e:
        print(f"Error: {to_core_error(e, default_category='manifest')}", file=sys.stderr)
        return 1

    base_path = Path(args.output_dir) if args.output_dir else manifest_path.parent / output_dir

    failures = 0
    for filename, target in targets.items():
        try:
            generate_schema(target, base_path / filename)
        except Exception as e:
            failures += 1
            print(f"Error generating schema for {target}: {to_core_error(e)}")

    print(f"\nSchemas generated in: {base_path}")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())

"""CLI for QC Photo Docs: database setup, template catalog, metadata checks."""

from __future__ import annotations

import argparse
import asyncio
import sys


async def cmd_init_db(args):
    """Create all tables on the configured database."""
    from app.config import get_settings
    from app.db.engine import create_tables, engine

    await create_tables()
    await engine.dispose()
    print(f"Tables created on {get_settings().database_url}")


def cmd_templates(args):
    """List the photo template catalog."""
    from app.domain.templates import DEFAULT_CATALOG

    for template in DEFAULT_CATALOG:
        print(f"{template.name:<24} {template.description}")
        if args.verbose:
            print(f"{'':<24} requires: {template.required_fields_description()}")


def cmd_check_metadata(args) -> int:
    """Validate metadata against the configured quality standards."""
    from app.config import get_settings
    from app.domain.metadata import PhotoMetadata
    from app.domain.quality import validate

    try:
        metadata = PhotoMetadata(
            width=args.width,
            height=args.height,
            file_size=args.file_size,
            image_format=args.format,
            color_space=args.color_space,
            dpi=args.dpi,
        )
    except ValueError as e:
        print(f"Invalid metadata: {e}")
        return 2

    violations = validate(metadata, get_settings().quality_standards.to_standards())
    print(f"{metadata.resolution} ({metadata.megapixels:.2f} MP), {metadata.file_size} bytes")
    if not violations:
        print("OK: meets quality standards")
        return 0
    for v in violations:
        print(f"- {v}")
    return 1


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="QC Photo Docs CLI")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    subparsers = parser.add_subparsers(dest="command")

    # init-db
    subparsers.add_parser("init-db", help="Create database tables")

    # templates
    tp = subparsers.add_parser("templates", help="List photo templates")
    tp.add_argument("-v", "--verbose", action="store_true", help="Show required fields")

    # check-metadata
    cm = subparsers.add_parser("check-metadata", help="Check photo metadata against quality standards")
    cm.add_argument("--width", type=int, required=True)
    cm.add_argument("--height", type=int, required=True)
    cm.add_argument("--file-size", type=int, required=True, help="Size in bytes")
    cm.add_argument("--format", required=True, help="Image format, e.g. JPEG")
    cm.add_argument("--color-space", default="sRGB")
    cm.add_argument("--dpi", type=int, default=None)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    from app.config import get_settings
    from app.logging_config import configure_logging

    configure_logging(args.log_level or get_settings().logging.level)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "templates":
        cmd_templates(args)
    elif args.command == "check-metadata":
        sys.exit(cmd_check_metadata(args))


if __name__ == "__main__":
    main()

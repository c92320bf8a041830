#!/usr/bin/env python
# ============================================================================
# SCHEMA DEPLOYMENT SCRIPT
# ============================================================================
# PURPOSE: Deploy the backoffice schema to PostgreSQL using PydanticToSQL
# USAGE:
#   python scripts/deploy_schema.py --dry-run    # Preview SQL
#   python scripts/deploy_schema.py              # Execute deployment
#   python scripts/deploy_schema.py --status     # Check current status
# ============================================================================

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.logging import configure_logging
from infrastructure import DatabaseInitializer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Deploy the backoffice schema to PostgreSQL",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/deploy_schema.py --dry-run     # Preview DDL without executing
  python scripts/deploy_schema.py               # Deploy schema
  python scripts/deploy_schema.py --status      # Check current installation

Environment Variables:
  DATABASE_URL          Full PostgreSQL connection string
  POSTGRES_HOST         Database host (default: localhost)
  POSTGRES_DB           Database name (default: postgres)
  POSTGRES_USER         Database user (default: postgres)
  POSTGRES_PASSWORD     Database password
  POSTGRES_PORT         Database port (default: 5432)
  POSTGRES_SSLMODE      SSL mode (default: require)
        """
    )
    parser.add_argument("--dry-run", action="store_true", help="Print DDL without executing")
    parser.add_argument("--status", action="store_true", help="Check current installation status")
    parser.add_argument(
        "--connection",
        type=str,
        help="PostgreSQL connection string (overrides environment)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def print_status(initializer: DatabaseInitializer) -> int:
    print("\n[STATUS CHECK]\n")
    status = initializer.verify_installation()

    if status.get("error"):
        print(f"Error: {status['error']}")
        return 1

    print(f"Tables ({len(status['tables'])}):")
    for table, count in status["tables"].items():
        state = "missing" if count < 0 else f"{count} rows"
        print(f"  - {initializer.SCHEMA_NAME}.{table} ({state})")
    return 0


def deploy(initializer: DatabaseInitializer, dry_run: bool, verbose: bool) -> int:
    print(f"\nMode: {'DRY RUN' if dry_run else 'EXECUTE'}\n")
    result = initializer.initialize_all(dry_run=dry_run)

    print("\n[RESULTS]\n")
    for step in result.steps:
        print(f"[{step.status.upper()}] {step.name}: {step.message}")
        if step.error:
            print(f"   Error: {step.error}")
        if dry_run:
            for statement in step.details.get("statements", []):
                print(f"{statement};\n")
        elif step.details and verbose:
            for key, value in step.details.items():
                print(f"   {key}: {value}")

    print("\n" + "=" * 70)
    if not result.success:
        print("Deployment failed!")
        for error in result.errors:
            print(f"   - {error}")
        return 1
    print("Deployment completed successfully!")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level="DEBUG" if args.verbose else "INFO")

    print("=" * 70)
    print("PODCASTER BACK OFFICE - Schema Deployment")
    print("=" * 70)

    initializer = DatabaseInitializer(connection_string=args.connection)
    print(f"Schema: {initializer.SCHEMA_NAME}")
    print("=" * 70)

    if args.status:
        return print_status(initializer)
    return deploy(initializer, args.dry_run, args.verbose)


if __name__ == "__main__":
    sys.exit(main())

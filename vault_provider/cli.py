"""Command line interface for the Vault provider.

Usage:
    python -m vault_provider apply vault_mfa_login_enforcement --config enforcement.json
    python -m vault_provider read vault_mfa_login_enforcement my-enforcement
    python -m vault_provider list kvv1/app

Connection settings default to the VAULT_* environment variables (a .env
file in the repository root is honoured) and can be overridden by flags.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from vault_provider.config import connection_settings_from_env
from vault_provider.data_sources import KVSecretListDataSource
from vault_provider.exceptions import ProviderError, ValidationError
from vault_provider.models import VaultConnectionConfig
from vault_provider.provider import Provider
from vault_provider.resources import parse_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vault-provider",
        description="Manage HashiCorp Vault objects declaratively",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Create or update an MFA login enforcement
    vault-provider apply vault_mfa_login_enforcement --config enforcement.json

    # Import an existing one into state
    vault-provider import vault_mfa_login_enforcement my-enforcement

    # List secrets on a KV v1 mount
    vault-provider list kvv1
        """,
    )
    parser.add_argument(
        "--vault-addr",
        default=None,
        help="Vault server address (default: $VAULT_ADDR)",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="Vault token (default: $VAULT_TOKEN)",
    )
    parser.add_argument(
        "--namespace",
        default=None,
        help="Enterprise namespace (default: $VAULT_NAMESPACE)",
    )
    parser.add_argument(
        "--no-verify",
        action="store_true",
        help="Disable TLS certificate verification",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    apply_cmd = commands.add_parser("apply", help="Create or update a resource")
    apply_cmd.add_argument("type_name", help="Resource type, e.g. vault_mfa_login_enforcement")
    apply_cmd.add_argument("--config", required=True, help="JSON file with the resource configuration")

    for name, help_text in (
        ("read", "Refresh a resource from Vault"),
        ("import", "Import an existing resource by identifier"),
        ("destroy", "Delete a resource"),
    ):
        cmd = commands.add_parser(name, help=help_text)
        cmd.add_argument("type_name", help="Resource type")
        cmd.add_argument("identifier", help="Resource identifier (its name)")

    list_cmd = commands.add_parser("list", help="List secrets under a KV v1 path")
    list_cmd.add_argument("path", help="Mount or path to list")

    commands.add_parser("schema", help="Print the provider schema")
    return parser


def _load_config_file(path: str) -> dict:
    try:
        return json.loads(Path(path).read_text())
    except OSError as e:
        raise ValidationError(f"Cannot read configuration file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {path}: {e}") from e


def _build_provider(args: argparse.Namespace) -> Provider:
    overrides = {}
    if args.vault_addr:
        overrides["vault_addr"] = args.vault_addr
    if args.token:
        overrides["token"] = args.token
    if args.namespace:
        overrides["namespace"] = args.namespace
    if args.no_verify:
        overrides["verify"] = False
    config = parse_config(VaultConnectionConfig, {**connection_settings_from_env(), **overrides})
    return Provider.from_config(config)


def run(args: argparse.Namespace) -> Optional[dict]:
    """Execute a parsed command and return what should be printed."""
    if args.command == "schema":
        return Provider.schema()

    with _build_provider(args) as provider:
        if args.command == "apply":
            return provider.apply(args.type_name, _load_config_file(args.config)).to_dict()
        if args.command == "read":
            return provider.refresh(args.type_name, args.identifier).to_dict()
        if args.command == "import":
            return provider.import_resource(args.type_name, args.identifier).to_dict()
        if args.command == "destroy":
            provider.destroy(args.type_name, args.identifier)
            return None
        if args.command == "list":
            return provider.read_data_source(
                KVSecretListDataSource.type_name, {"path": args.path}
            ).to_dict()
    raise ValidationError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the provider CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
    )

    try:
        result = run(args)
    except ProviderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result is not None:
        print(json.dumps(result, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())

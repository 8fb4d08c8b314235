"""CLI entrypoint for secret-lister."""
import sys
import os
import argparse
import logging

from secret_lister.secrets.domains.config_loader import CONFIG_ENV_VAR, default_config_path, load_config
from secret_lister.secrets.domains.errors import ConfigError
from secret_lister.secrets.domains.providers import DEFAULT_PROVIDER, PROVIDERS, get_provider
from secret_lister.secrets.workflows.list_secrets import run

VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    """Send logs to stderr so stdout carries only secret names."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="list-secrets",
        description="List the names of secrets in a cloud secret store using developer credentials",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Exit codes:
  0 - Success (all secret names printed, one per line)
  1 - Runtime error (missing endpoint, authentication, network, malformed response, etc.)
  2 - Usage error (invalid arguments, invalid config file)

Environment variables:
  AZURE_KEYVAULT_URL  - Key Vault endpoint (azure provider)
  GCP_PROJECT         - GCP project ID (gcp provider)
  {CONFIG_ENV_VAR} - Path to config file

Configuration:
  Default location: {default_config_path()}
        """
    )
    parser.add_argument(
        "endpoint",
        nargs="?",
        help="Key Vault URL (azure) or project ID (gcp); overrides the environment variable"
    )
    parser.add_argument(
        "--provider",
        choices=sorted(PROVIDERS),
        help=f"Secret store to list (default: config file, then {DEFAULT_PROVIDER})"
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        default=None,
        help="Print names in ascending order instead of store order"
    )
    parser.add_argument(
        "--config",
        help=f"Path to YAML config file (default: ${CONFIG_ENV_VAR} or {default_config_path()})"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug information to stderr"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"secret-lister {VERSION}"
    )
    return parser


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (missing endpoint, authentication, network, etc.)
        2 - Usage errors (invalid arguments, invalid config file)
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    level = "DEBUG" if args.verbose else (config.get("logging") or {}).get("level") or "WARNING"
    _configure_logging(str(level))

    provider_name = args.provider or config.get("provider") or DEFAULT_PROVIDER
    provider = get_provider(provider_name)

    # A config endpoint belongs to the config provider (azure when unset)
    config_endpoint = None
    if (config.get("provider") or DEFAULT_PROVIDER) == provider_name:
        config_endpoint = config.get("endpoint")

    sort = args.sort if args.sort is not None else config.get("sort", False)

    try:
        run(
            args.endpoint,
            os.environ,
            provider,
            out=sys.stdout,
            sort=sort,
            config_endpoint=config_endpoint,
        )
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.debug("Listing failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

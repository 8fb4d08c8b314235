"""Workflow for listing secret names from a secret store."""
import logging
import sys
from contextlib import closing
from typing import Iterator, Mapping, Optional, TextIO

from ..domains.errors import MissingConfiguration
from ..domains.providers import Provider

logger = logging.getLogger(__name__)


def resolve_endpoint(
    endpoint_arg: Optional[str],
    env: Mapping[str, str],
    provider: Provider,
    config_endpoint: Optional[str] = None,
) -> str:
    """
    Resolve the store endpoint.

    Priority order:
    1. First command-line argument
    2. Provider environment variable (e.g. AZURE_KEYVAULT_URL)
    3. 'endpoint' from the config file

    Raises:
        MissingConfiguration: If no source provides an endpoint
    """
    if endpoint_arg:
        logger.debug(f"Using endpoint from command line: {endpoint_arg}")
        return endpoint_arg

    env_value = env.get(provider.env_var)
    if env_value:
        logger.debug(f"Using endpoint from ${provider.env_var}: {env_value}")
        return env_value

    if config_endpoint:
        logger.debug(f"Using endpoint from config: {config_endpoint}")
        return config_endpoint

    raise MissingConfiguration(
        f"{provider.endpoint_label} (first argument) or ${provider.env_var} required"
    )


def iter_secret_names(endpoint: str, provider: Provider) -> Iterator[str]:
    """
    Yield secret names in store order, fetching pages as they are needed.

    Credential acquisition happens before the client is built, and the client
    before the listing request, so a failure at any step means none of the
    later steps run. The client is closed when the generator finishes.
    """
    credential = provider.credential_provider.acquire()
    with closing(provider.client_factory(endpoint, credential)) as client:
        for properties in client.list_secret_properties():
            yield client.extract_name(properties.id)


def print_secret_names(endpoint: str, provider: Provider, out: TextIO, sort: bool = False) -> int:
    """
    Print one secret name per line.

    Each name is flushed as soon as it is known, so names printed before a
    mid-stream failure stay printed. With sort=True the whole listing is
    drained first and nothing is printed if it fails.

    Returns:
        Number of names printed
    """
    names = iter_secret_names(endpoint, provider)
    if sort:
        names = iter(sorted(names))

    count = 0
    for name in names:
        out.write(f"{name}\n")
        out.flush()
        count += 1

    logger.info(f"Listed {count} secret(s) from {endpoint}")
    return count


def run(
    endpoint_arg: Optional[str],
    env: Mapping[str, str],
    provider: Provider,
    out: Optional[TextIO] = None,
    sort: bool = False,
    config_endpoint: Optional[str] = None,
) -> int:
    """
    Resolve the endpoint, then list and print every secret name.

    Args:
        endpoint_arg: First positional command-line argument, if any
        env: Environment variables
        provider: Secret store to talk to
        out: Output stream (stdout if not provided)
        sort: Print names in ascending order instead of store order
        config_endpoint: Endpoint from the config file, used last

    Returns:
        Number of names printed

    Raises:
        ListerError: The first failure; no step is retried
    """
    if out is None:
        out = sys.stdout

    endpoint = resolve_endpoint(endpoint_arg, env, provider, config_endpoint)
    return print_secret_names(endpoint, provider, out, sort=sort)

"""Supported secret stores and how to reach each one."""
from dataclasses import dataclass
from typing import Any, Callable, Dict

from .azure_client import AzureSecretClient
from .credentials import AzureDeveloperCredentialProvider, GoogleDefaultCredentialProvider
from .errors import ConfigError
from .gcp_client import GCPSecretClient
from .models import CredentialProvider, SecretStoreClient

DEFAULT_PROVIDER = "azure"


@dataclass(frozen=True)
class Provider:
    """A secret store: where its endpoint comes from, how to authenticate, how to list."""
    name: str
    endpoint_label: str
    env_var: str
    credential_provider: CredentialProvider
    client_factory: Callable[[str, Any], SecretStoreClient]


PROVIDERS: Dict[str, Provider] = {
    "azure": Provider(
        name="azure",
        endpoint_label="Key Vault endpoint",
        env_var="AZURE_KEYVAULT_URL",
        credential_provider=AzureDeveloperCredentialProvider(),
        client_factory=AzureSecretClient,
    ),
    "gcp": Provider(
        name="gcp",
        endpoint_label="GCP project",
        env_var="GCP_PROJECT",
        credential_provider=GoogleDefaultCredentialProvider(),
        client_factory=GCPSecretClient,
    ),
}


def get_provider(name: str) -> Provider:
    """
    Look up a provider by name.

    Raises:
        ConfigError: If the provider is not supported
    """
    try:
        return PROVIDERS[name]
    except KeyError:
        raise ConfigError(
            f"Unsupported provider: {name}\n"
            f"Supported providers: {', '.join(sorted(PROVIDERS))}"
        ) from None

"""Azure Key Vault secret client wrapper."""
import logging
from typing import Iterator
from urllib.parse import urlparse

from azure.core.exceptions import AzureError, ClientAuthenticationError, DecodeError
from azure.keyvault.secrets import KeyVaultSecretIdentifier, SecretClient

from .errors import (
    AuthenticationError,
    ClientConstructionError,
    MalformedResponseError,
    RequestError,
)
from .models import SecretProperties

logger = logging.getLogger(__name__)


class AzureSecretClient:
    """Lists secret properties in one Key Vault."""

    def __init__(self, vault_url: str, credential):
        parsed = urlparse(vault_url)
        if parsed.scheme != "https" or not parsed.hostname:
            raise ClientConstructionError(
                f"Invalid Key Vault endpoint '{vault_url}': expected a URL like https://<vault-name>.vault.azure.net/"
            )

        try:
            self._client = SecretClient(vault_url=vault_url, credential=credential)
        except (ValueError, TypeError, AzureError) as e:
            raise ClientConstructionError(f"Failed to create Key Vault client for {vault_url}: {e}") from e

        self.vault_url = vault_url
        logger.debug(f"Created Key Vault client for {vault_url}")

    def list_secret_properties(self) -> Iterator[SecretProperties]:
        """
        Request the lazy page sequence of secret properties.

        No network call happens until the returned iterator is advanced. Each
        page boundary is one round trip; SDK errors raised while paging are
        mapped onto the lister error taxonomy.

        Raises:
            RequestError: If the request cannot be created
        """
        try:
            pager = self._client.list_properties_of_secrets()
        except AzureError as e:
            raise RequestError(f"Failed to list secrets in {self.vault_url}: {e}") from e
        return self._iter_pages(pager)

    def _iter_pages(self, pager) -> Iterator[SecretProperties]:
        try:
            for page_number, page in enumerate(pager.by_page(), start=1):
                logger.debug(f"Fetched page {page_number} from {self.vault_url}")
                for item in page:
                    yield SecretProperties(
                        id=item.id,
                        enabled=item.enabled,
                        content_type=item.content_type,
                        created_on=item.created_on,
                        updated_on=item.updated_on,
                        tags=dict(item.tags or {}),
                    )
        except ClientAuthenticationError as e:
            raise AuthenticationError(f"Authentication to {self.vault_url} failed: {e.message}") from e
        except DecodeError as e:
            raise MalformedResponseError(f"Could not decode response from {self.vault_url}: {e.message}") from e
        except AzureError as e:
            raise RequestError(f"Failed to list secrets in {self.vault_url}: {e.message}") from e

    def extract_name(self, identifier: str) -> str:
        """Derive the secret name from an id like https://vault/secrets/<name>[/<version>]."""
        if not isinstance(identifier, str) or not identifier:
            raise MalformedResponseError("Secret item has no identifier")
        try:
            name = KeyVaultSecretIdentifier(identifier).name
        except ValueError as e:
            raise MalformedResponseError(f"Malformed secret identifier '{identifier}': {e}") from e

        # The SDK parser accepts any collection (keys, certificates, ...)
        collection = urlparse(identifier).path.strip("/").split("/")[0]
        if collection != "secrets":
            raise MalformedResponseError(f"Identifier '{identifier}' is not a secret identifier")
        return name

    def close(self) -> None:
        self._client.close()

"""Ambient developer credential providers."""
import logging

import google.auth
from google.auth.exceptions import GoogleAuthError
from azure.core.exceptions import AzureError
from azure.identity import AzureCliCredential, AzureDeveloperCliCredential, ChainedTokenCredential

from .errors import AuthenticationError

logger = logging.getLogger(__name__)

GCP_CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"


class AzureDeveloperCredentialProvider:
    """Credentials from locally logged-in Azure developer tools.

    Tries the Azure CLI (`az login`) first, then the Azure Developer CLI
    (`azd auth login`). Tokens are requested lazily by the SDK, so a missing
    login surfaces on the first page fetch.
    """

    def acquire(self) -> ChainedTokenCredential:
        try:
            credential = ChainedTokenCredential(AzureCliCredential(), AzureDeveloperCliCredential())
        except (ValueError, AzureError) as e:
            raise AuthenticationError(f"Failed to create Azure developer credential: {e}") from e
        logger.debug("Using Azure developer tools credential chain (az, azd)")
        return credential


class GoogleDefaultCredentialProvider:
    """Application default credentials (`gcloud auth application-default login`)."""

    def acquire(self):
        try:
            credentials, project_id = google.auth.default(scopes=[GCP_CLOUD_PLATFORM_SCOPE])
        except GoogleAuthError as e:
            raise AuthenticationError(f"Failed to load Google application default credentials: {e}") from e
        logger.debug(f"Using Google application default credentials (quota project: {project_id or 'none'})")
        return credentials

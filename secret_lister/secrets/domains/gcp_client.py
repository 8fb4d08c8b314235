"""GCP Secret Manager client wrapper."""
import logging
import re
from typing import Iterator

from google.api_core import exceptions as api_exceptions
from google.auth.exceptions import GoogleAuthError, RefreshError, TransportError
from google.cloud import secretmanager

from .errors import (
    AuthenticationError,
    ClientConstructionError,
    MalformedResponseError,
    RequestError,
)
from .models import SecretProperties

logger = logging.getLogger(__name__)

# Project IDs are lowercase letters, digits and hyphens; project numbers are digits
PROJECT_ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")

parse_secret_path = secretmanager.SecretManagerServiceClient.parse_secret_path


def normalize_project(endpoint: str) -> str:
    """
    Accept either 'my-project' or 'projects/my-project'.

    Raises:
        ClientConstructionError: If the value is not a valid project id
    """
    project_id = endpoint.strip().strip("/")
    if project_id.startswith("projects/"):
        project_id = project_id[len("projects/"):]

    if not PROJECT_ID_PATTERN.match(project_id):
        raise ClientConstructionError(
            f"Invalid GCP project '{endpoint}': expected a project id like my-project or projects/my-project"
        )
    return project_id


class GCPSecretClient:
    """Wrapper around GCP Secret Manager client."""

    def __init__(self, project: str, credential):
        self.project_id = normalize_project(project)

        try:
            self._client = secretmanager.SecretManagerServiceClient(credentials=credential)
        except (ValueError, TypeError, GoogleAuthError) as e:
            raise ClientConstructionError(f"Failed to create Secret Manager client: {e}") from e

        logger.debug(f"Created Secret Manager client for project {self.project_id}")

    @property
    def parent(self) -> str:
        return f"projects/{self.project_id}"

    def list_secret_properties(self) -> Iterator[SecretProperties]:
        """
        Request the lazy page sequence of secrets in the project.

        The first page is fetched by this call; later pages are fetched as
        the returned iterator crosses each page boundary.

        Raises:
            AuthenticationError: If credentials are rejected or cannot refresh
            RequestError: If the first page cannot be fetched
        """
        try:
            pager = self._client.list_secrets(request={"parent": self.parent})
        except (api_exceptions.GoogleAPIError, RefreshError, TransportError) as e:
            raise self._map_error(e) from e
        return self._iter_pages(pager)

    def _iter_pages(self, pager) -> Iterator[SecretProperties]:
        try:
            for page_number, page in enumerate(pager.pages, start=1):
                logger.debug(f"Fetched page {page_number} from {self.parent}")
                for secret in page.secrets:
                    yield SecretProperties(
                        id=secret.name,
                        created_on=secret.create_time,
                        tags=dict(secret.labels),
                    )
        except (api_exceptions.GoogleAPIError, RefreshError, TransportError) as e:
            raise self._map_error(e) from e

    def _map_error(self, error: Exception) -> Exception:
        if isinstance(error, (api_exceptions.Unauthenticated, RefreshError)):
            return AuthenticationError(f"Authentication to Secret Manager failed: {error}")
        return RequestError(f"Failed to list secrets in {self.parent}: {error}")

    def extract_name(self, identifier: str) -> str:
        """Derive the secret name from projects/<project>/secrets/<name>."""
        if not isinstance(identifier, str) or not identifier:
            raise MalformedResponseError("Secret item has no resource name")
        parsed = parse_secret_path(identifier)
        if not parsed:
            raise MalformedResponseError(f"Malformed secret resource name '{identifier}'")
        return parsed["secret"]

    def close(self) -> None:
        self._client.transport.close()

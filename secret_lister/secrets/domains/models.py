"""Domain models for secret listing."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, Optional, Protocol


@dataclass(frozen=True)
class SecretProperties:
    """Metadata for one listed secret. Never carries the secret value."""
    id: str
    enabled: Optional[bool] = None
    content_type: Optional[str] = None
    created_on: Optional[datetime] = None
    updated_on: Optional[datetime] = None
    tags: Dict[str, str] = field(default_factory=dict)


class CredentialProvider(Protocol):
    """Ambient credential discovery with a single capability."""

    def acquire(self) -> Any:
        ...


class SecretStoreClient(Protocol):
    """Client bound to one endpoint and one credential."""

    def list_secret_properties(self) -> Iterator[SecretProperties]:
        ...

    def extract_name(self, identifier: str) -> str:
        ...

    def close(self) -> None:
        ...

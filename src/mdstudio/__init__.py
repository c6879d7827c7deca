"""mdstudio — typed access to markdown/MDX content collections."""

from mdstudio.domain.collection import Collection
from mdstudio.domain.entry import Entry
from mdstudio.domain.errors import (
    CollectionNotFoundError,
    ConfigurationError,
    DuplicateCollectionError,
    DuplicateSlugError,
    EntryNotFoundError,
    InvalidSecretError,
    MethodNotImplementedError,
    NotFoundError,
    RemoteBackendError,
    StudioError,
    ValidationError,
)
from mdstudio.domain.secrets import SecretBox
from mdstudio.domain.studio import StudioConfig, define_studio_config
from mdstudio.domain.validation import Issue, ValidationOutcome, Validator

__version__ = "0.1.0"

__all__ = [
    "Collection",
    "CollectionNotFoundError",
    "ConfigurationError",
    "DuplicateCollectionError",
    "DuplicateSlugError",
    "Entry",
    "EntryNotFoundError",
    "InvalidSecretError",
    "Issue",
    "MethodNotImplementedError",
    "NotFoundError",
    "RemoteBackendError",
    "SecretBox",
    "StudioConfig",
    "StudioError",
    "ValidationError",
    "ValidationOutcome",
    "Validator",
    "__version__",
    "define_studio_config",
]

"""Build a StudioConfig from settings.

Schemas are referenced from TOML by import string (``"pkg.module:Model"``)
and resolved here, the same way entry points are written.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from mdstudio.domain.collection import Collection
from mdstudio.domain.errors import ConfigurationError
from mdstudio.domain.studio import StudioConfig, define_studio_config

if TYPE_CHECKING:
    from mdstudio.config.settings import StudioSettings
    from mdstudio.infrastructure.github_client import RemoteGitBackend

logger = logging.getLogger(__name__)


def import_schema(ref: str) -> Any:
    """Resolve ``"module:attr"`` (dotted attr allowed) to an object.

    Raises:
        ConfigurationError: If the reference is malformed or cannot be imported.
    """
    module_name, sep, attr_path = ref.partition(":")
    if not sep or not module_name or not attr_path:
        msg = f"Invalid schema reference {ref!r}: expected 'module:attribute'"
        raise ConfigurationError(msg)
    try:
        obj: Any = importlib.import_module(module_name)
        for part in attr_path.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as exc:
        msg = f"Cannot import schema {ref!r}: {exc}"
        raise ConfigurationError(msg) from exc
    return obj


def load_studio(
    settings: StudioSettings,
    *,
    backend: RemoteGitBackend | None = None,
    environ: Mapping[str, str] | None = None,
) -> StudioConfig:
    """Create every declared collection and the shared remote adapter.

    The GitHub adapter is only constructed when ``[github].repo`` is set,
    so purely local projects never need a token.
    """
    remote = None
    if settings.github.repo:
        from mdstudio.infrastructure.adapters.github import GitHubAdapter

        remote = GitHubAdapter(
            settings.github.repo,
            branch=settings.github.branch,
            token_env=settings.github.token_env,
            backend=backend,
            environ=environ,
        )

    collections = []
    for declared in settings.collections:
        if declared.source == "remote" and remote is None and not declared.skip:
            msg = f"Collection {declared.name!r} has source 'remote' but [github].repo is not set"
            raise ConfigurationError(msg)
        schema = import_schema(declared.schema_ref) if declared.schema_ref else None
        collections.append(
            Collection.from_config(
                declared,
                schema=schema,
                root=settings.project_root,
                lenient=settings.lenient,
            )
        )
    logger.debug("Loaded %d collection declarations", len(collections))
    return define_studio_config(collections, remote=remote)

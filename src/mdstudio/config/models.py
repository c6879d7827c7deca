"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, mdstudio.toml only declares
collections and, for remote content, the [github] section.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# --- mdstudio.toml sections ---


class GitHubConfig(BaseModel):
    """[github] section."""

    model_config = {"frozen": True}

    repo: str | None = None
    branch: str = "main"
    token_env: str = "GITHUB_TOKEN"


class CollectionConfig(BaseModel):
    """One [[collections]] table.

    ``schema`` is an import string (``"package.module:Model"``) naming a
    pydantic model, ``TypeAdapter``, or validator object.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    name: str
    path: str
    schema_ref: str | None = Field(default=None, alias="schema")
    assets_path: str = "./public"
    skip: bool = False
    source: Literal["fs", "remote"] = "fs"

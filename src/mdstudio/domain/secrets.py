"""SecretBox — opaque holder for credentials.

The wrapped value never lives on the wrapper itself. It sits in a
module-level :class:`weakref.WeakKeyDictionary` keyed by wrapper identity,
so ``str()``, ``repr()``, ``format()``, pickling and copying all see an
empty shell. The only way back to the value is :meth:`SecretBox.reveal`.

JSON redaction happens through pydantic serialization only: a SecretBox
field in a model dumps as ``<redacted>``. Plain ``json.dumps(box)`` raises
``TypeError`` like any other unknown object.

Usage::

    token = SecretBox.from_env("GITHUB_TOKEN")
    client = GitHubRestClient(token)

INVARIANT: no default conversion of a SecretBox yields the wrapped value.
"""

from __future__ import annotations

import os
import weakref
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic_core import core_schema

from mdstudio.domain.errors import ConfigurationError, InvalidSecretError

V = TypeVar("V")

REDACTED = "<redacted>"

# Identity-keyed side table. Not exported; holding a wrapper is the only
# way to address an entry.
_secret_values: weakref.WeakKeyDictionary[SecretBox[Any], Any] = weakref.WeakKeyDictionary()


class SecretBox(Generic[V]):
    """Opaque wrapper around a sensitive value."""

    __slots__ = ("__weakref__",)

    def __init__(self) -> None:
        # Constructed empty; only from_value() associates a value.
        pass

    @classmethod
    def from_value(cls, value: V) -> SecretBox[V]:
        """Wrap *value*. No validation is performed."""
        box: SecretBox[V] = cls()
        _secret_values[box] = value
        return box

    @classmethod
    def from_env(cls, name: str, environ: Mapping[str, str] | None = None) -> SecretBox[str]:
        """Wrap the environment variable *name*.

        Raises:
            ConfigurationError: If the variable is not defined.
        """
        env = os.environ if environ is None else environ
        value = env.get(name)
        if value is None:
            msg = f"Environment variable {name!r} is not defined"
            raise ConfigurationError(msg)
        return cls.from_value(value)

    @staticmethod
    def reveal(box: SecretBox[V] | V) -> V:
        """Return the wrapped value.

        A plain (never wrapped) value is passed through unchanged so
        callers can accept either a SecretBox or a raw credential.

        Raises:
            InvalidSecretError: If *box* was disposed.
        """
        if not isinstance(box, SecretBox):
            return box
        try:
            return _secret_values[box]
        except KeyError:
            raise InvalidSecretError() from None

    def dispose(self) -> None:
        """Sever the association; the value becomes unrecoverable."""
        _secret_values.pop(self, None)

    def __enter__(self) -> SecretBox[V]:
        return self

    def __exit__(self, *exc: object) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return REDACTED

    def __str__(self) -> str:
        return REDACTED

    def __format__(self, format_spec: str) -> str:
        return REDACTED

    def __copy__(self) -> SecretBox[V]:
        return type(self)()

    def __deepcopy__(self, memo: dict[int, Any]) -> SecretBox[V]:
        return type(self)()

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), ())

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.is_instance_schema(
            cls,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda _box: REDACTED,
            ),
        )

"""Metadata validator contract.

Any object with ``validate(data) -> ValidationOutcome`` satisfies
:class:`Validator`; ``validate`` may also return an awaitable resolving
to the same shape. Pydantic models and ``TypeAdapter`` instances are
wrapped by :func:`as_validator` so collections can be declared with a
plain model class.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import pydantic
from pydantic import BaseModel, TypeAdapter


@dataclass(frozen=True)
class Issue:
    """A single problem reported by a validator."""

    message: str
    path: tuple[str | int, ...] = ()

    def __str__(self) -> str:
        if not self.path:
            return self.message
        location = ".".join(str(part) for part in self.path)
        return f"{location}: {self.message}"


@dataclass(frozen=True)
class ValidationOutcome:
    """Either a coerced ``value`` (success) or a non-empty ``issues`` list."""

    value: Any = None
    issues: list[Issue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    @classmethod
    def success(cls, value: Any) -> ValidationOutcome:
        return cls(value=value)

    @classmethod
    def failure(cls, issues: list[Issue]) -> ValidationOutcome:
        if not issues:
            msg = "A failed validation must carry at least one issue"
            raise ValueError(msg)
        return cls(issues=list(issues))


@runtime_checkable
class Validator(Protocol):
    """Black-box metadata validator, sync or async."""

    def validate(self, data: Any) -> Any: ...


class PydanticValidator:
    """Adapt a pydantic model class or ``TypeAdapter`` to :class:`Validator`."""

    def __init__(self, schema: type[BaseModel] | TypeAdapter[Any]) -> None:
        self.schema = schema

    def validate(self, data: Any) -> ValidationOutcome:
        try:
            if isinstance(self.schema, TypeAdapter):
                value = self.schema.validate_python(data)
            else:
                value = self.schema.model_validate(data)
        except pydantic.ValidationError as exc:
            issues = [
                Issue(message=err["msg"], path=tuple(err.get("loc", ()))) for err in exc.errors()
            ]
            return ValidationOutcome.failure(issues)
        return ValidationOutcome.success(value)

    def __repr__(self) -> str:
        name = getattr(self.schema, "__name__", type(self.schema).__name__)
        return f"PydanticValidator({name})"


def as_validator(schema: Any) -> Validator | None:
    """Coerce *schema* into a :class:`Validator` (``None`` passes through)."""
    if schema is None:
        return None
    # BaseModel has a deprecated ``validate`` classmethod; wrap before the
    # protocol check so it is never mistaken for a validator.
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return PydanticValidator(schema)
    if isinstance(schema, TypeAdapter):
        return PydanticValidator(schema)
    if isinstance(schema, Validator):
        return schema
    msg = f"Unsupported metadata schema: {schema!r}"
    raise TypeError(msg)


def _coerce_outcome(result: Any) -> ValidationOutcome:
    if isinstance(result, ValidationOutcome):
        return result
    if isinstance(result, dict):
        issues = result.get("issues")
        if issues:
            return ValidationOutcome.failure(
                [i if isinstance(i, Issue) else Issue(message=str(i)) for i in issues]
            )
        return ValidationOutcome.success(result.get("value"))
    msg = f"Validator returned an unsupported result: {result!r}"
    raise TypeError(msg)


async def run_validator(validator: Validator, data: Any) -> ValidationOutcome:
    """Invoke *validator* once, awaiting the result if it suspends."""
    result = validator.validate(data)
    if inspect.isawaitable(result):
        result = await result
    return _coerce_outcome(result)

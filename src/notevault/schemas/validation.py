"""Turn pydantic validation failures into taxonomy errors."""

from __future__ import annotations

from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel

from ..errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validation_issues(exc: pydantic.ValidationError) -> list[dict[str, str]]:
    """Field-level issues without the offending input values."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "__root__",
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]


def validate_input(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate ``data`` against ``model``.

    Raises:
        ValidationError: With ``meta['validation_errors']`` listing each issue
    """
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(meta={"validation_errors": validation_issues(e)}) from e

"""
# Validation Pipeline

Request validation as an ordered list of predicate objects. Each endpoint
declares its pipeline once; `ValidationPipeline.run` evaluates the predicates in
order and raises on the first failure, so later predicates never see a request
an earlier one rejected. Nothing is written before the whole pipeline passes.

```python
pipeline = ValidationPipeline(
    "followers.create",
    [UserLoggedIn(), FieldsGiven(["username"], {"username": "Username must be given."})],
)
await pipeline.run(RequestContext(body=payload, session_username=username))
```
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from freet_social.errors import AuthError, ConflictError, ErrorDetail, FreetError, NotFoundError, ValidationError
from freet_social.managers.logging_manager import get_logger

logger = get_logger(prefix="[ValidationPipeline]")

ModelT = TypeVar("ModelT", bound=BaseModel)


class FailureReason(str, Enum):
    INVALID = "invalid"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


FAILURE_ERRORS: Dict[FailureReason, Type[FreetError]] = {
    FailureReason.INVALID: ValidationError,
    FailureReason.UNAUTHENTICATED: AuthError,
    FailureReason.NOT_FOUND: NotFoundError,
    FailureReason.CONFLICT: ConflictError,
}


@dataclass
class RequestContext:
    """Everything a predicate may inspect about the incoming request."""

    body: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    session_username: Optional[str] = None

    def source(self, name: str) -> Mapping[str, Any]:
        return self.query if name == "query" else self.body


# A detail is either fixed or computed from the request.
Detail = Union[ErrorDetail, Callable[[RequestContext], ErrorDetail]]


def resolve_detail(detail: Detail, context: RequestContext) -> ErrorDetail:
    return detail(context) if callable(detail) else detail


@dataclass
class PredicateResult:
    passed: bool
    reason: Optional[FailureReason] = None
    detail: Optional[ErrorDetail] = None

    @classmethod
    def ok(cls) -> "PredicateResult":
        return cls(passed=True)

    @classmethod
    def fail(cls, reason: FailureReason, detail: ErrorDetail) -> "PredicateResult":
        return cls(passed=False, reason=reason, detail=detail)

    def to_error(self) -> FreetError:
        return FAILURE_ERRORS[self.reason](self.detail)


class Predicate:
    """A single named check over a `RequestContext`."""

    name: str = "predicate"

    async def check(self, context: RequestContext) -> PredicateResult:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class ValidationPipeline:
    def __init__(self, name: str, predicates: Sequence[Predicate]):
        self.name = name
        self.predicates: List[Predicate] = list(predicates)

    async def run(self, context: RequestContext) -> None:
        """
        Evaluate every predicate in order.

        Raises:
            FreetError: The error mapped from the first failing predicate's reason.
        """
        for predicate in self.predicates:
            result = await predicate.check(context)
            if not result.passed:
                logger.info(
                    "%s rejected by %s (%s): %s", self.name, predicate.name, result.reason.value, result.detail
                )
                raise result.to_error()
        logger.debug("%s passed %d predicates", self.name, len(self.predicates))


def flatten_errors(errors: Sequence[Mapping[str, Any]]) -> Dict[str, str]:
    """`{location: message}` from Pydantic error entries; a leading `body` is dropped."""
    flattened: Dict[str, str] = {}
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if error.get("type") == "json_invalid":
            # loc carries the character offset of the parse failure
            location = ["body"]
        elif len(location) > 1 and location[0] == "body":
            location = location[1:]
        flattened[".".join(location) or "body"] = error.get("msg", "Invalid value")
    return flattened


def parse_payload(model: Type[ModelT], payload: Mapping[str, Any]) -> ModelT:
    """Load a validated payload into its request model; any mismatch is a 400."""
    try:
        return model.model_validate(dict(payload))
    except PydanticValidationError as e:
        errors = flatten_errors(e.errors())
        logger.warning("Payload rejected by %s: %s", model.__name__, errors)
        raise ValidationError(errors) from e

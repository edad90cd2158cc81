"""Ordered, declarative request validation for the relationship routes."""

from freet_social.validation.pipeline import (
    FailureReason,
    Predicate,
    PredicateResult,
    RequestContext,
    ValidationPipeline,
    parse_payload,
)
from freet_social.validation.predicates import (
    ActionTargetExists,
    FieldsGiven,
    IsString,
    MatchesPattern,
    OneOf,
    RecordAbsent,
    RecordExists,
    UserLoggedIn,
)

__all__ = [
    "ActionTargetExists",
    "FailureReason",
    "FieldsGiven",
    "IsString",
    "MatchesPattern",
    "OneOf",
    "Predicate",
    "PredicateResult",
    "RecordAbsent",
    "RecordExists",
    "RequestContext",
    "UserLoggedIn",
    "ValidationPipeline",
    "parse_payload",
]

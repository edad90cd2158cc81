"""
Predicate families used by the route pipelines.

A field counts as given unless it is missing, `None` or `""`. Predicates read
from the request body unless built with `source="query"`.
"""

import re
from typing import Any, Awaitable, Callable, Iterable, Optional, Sequence

from freet_social.models.group_tagging_models import ACTION_TARGET_FIELDS, GroupAction
from freet_social.validation.pipeline import (
    Detail,
    FailureReason,
    Predicate,
    PredicateResult,
    RequestContext,
    resolve_detail,
)

Lookup = Callable[[Any], Awaitable[Optional[Any]]]


def is_given(value: Any) -> bool:
    return value is not None and value != ""


class UserLoggedIn(Predicate):
    """The request carries an authenticated session."""

    name = "UserLoggedIn"

    def __init__(self, detail: Detail = None):
        self.detail = detail or {"auth": "You must be logged in to complete this action."}

    async def check(self, context: RequestContext) -> PredicateResult:
        if context.session_username:
            return PredicateResult.ok()
        return PredicateResult.fail(FailureReason.UNAUTHENTICATED, resolve_detail(self.detail, context))


class FieldsGiven(Predicate):
    def __init__(self, fields: Sequence[str], detail: Detail, source: str = "body"):
        self.fields = list(fields)
        self.detail = detail
        self.source = source
        self.name = f"FieldsGiven({', '.join(self.fields)})"

    async def check(self, context: RequestContext) -> PredicateResult:
        values = context.source(self.source)
        if all(is_given(values.get(field)) for field in self.fields):
            return PredicateResult.ok()
        return PredicateResult.fail(FailureReason.INVALID, resolve_detail(self.detail, context))


class MatchesPattern(Predicate):
    """
    Every listed field fully matches `pattern`.

    Args:
        passthrough: Values accepted without matching (for example `""` or `"delete"`).
        optional: Accept fields that are missing or `None`.
        flags: `re` flags, for example `re.ASCII` for ASCII-only word classes.
    """

    def __init__(
        self,
        fields: Sequence[str],
        pattern: str,
        detail: Detail,
        passthrough: Iterable[str] = (),
        optional: bool = False,
        source: str = "body",
        flags: int = 0,
    ):
        self.fields = list(fields)
        self.pattern = re.compile(pattern, flags)
        self.detail = detail
        self.passthrough = tuple(passthrough)
        self.optional = optional
        self.source = source
        self.name = f"MatchesPattern({', '.join(self.fields)})"

    def _accepts(self, value: Any) -> bool:
        if value is None:
            return self.optional
        if not isinstance(value, str):
            return False
        if value in self.passthrough:
            return True
        return self.pattern.fullmatch(value) is not None

    async def check(self, context: RequestContext) -> PredicateResult:
        values = context.source(self.source)
        if all(self._accepts(values.get(field)) for field in self.fields):
            return PredicateResult.ok()
        return PredicateResult.fail(FailureReason.INVALID, resolve_detail(self.detail, context))


class IsString(Predicate):
    """Every listed field is a string when present."""

    def __init__(self, fields: Sequence[str], detail: Detail, optional: bool = True, source: str = "body"):
        self.fields = list(fields)
        self.detail = detail
        self.optional = optional
        self.source = source
        self.name = f"IsString({', '.join(self.fields)})"

    def _accepts(self, value: Any) -> bool:
        if value is None:
            return self.optional
        return isinstance(value, str)

    async def check(self, context: RequestContext) -> PredicateResult:
        values = context.source(self.source)
        if all(self._accepts(values.get(field)) for field in self.fields):
            return PredicateResult.ok()
        return PredicateResult.fail(FailureReason.INVALID, resolve_detail(self.detail, context))


class OneOf(Predicate):
    """The field's value is one of `allowed`, compared by value and type."""

    def __init__(
        self,
        field: str,
        allowed: Iterable[Any],
        detail: Detail,
        optional: bool = False,
        source: str = "body",
    ):
        self.field = field
        self.allowed = tuple(allowed)
        self.detail = detail
        self.optional = optional
        self.source = source
        self.name = f"OneOf({field})"

    def _accepts(self, value: Any) -> bool:
        if not is_given(value):
            return self.optional
        # True == 1, so membership alone would let numbers through.
        return any(type(value) is type(option) and value == option for option in self.allowed)

    async def check(self, context: RequestContext) -> PredicateResult:
        if self._accepts(context.source(self.source).get(self.field)):
            return PredicateResult.ok()
        return PredicateResult.fail(FailureReason.INVALID, resolve_detail(self.detail, context))


class RecordExists(Predicate):
    """`lookup` finds a record for every listed field, else 404."""

    def __init__(self, lookup: Lookup, fields: Sequence[str], detail: Detail, source: str = "body"):
        self.lookup = lookup
        self.fields = list(fields)
        self.detail = detail
        self.source = source
        self.name = f"RecordExists({', '.join(self.fields)})"

    async def check(self, context: RequestContext) -> PredicateResult:
        values = context.source(self.source)
        for field in self.fields:
            if await self.lookup(values.get(field)) is None:
                return PredicateResult.fail(FailureReason.NOT_FOUND, resolve_detail(self.detail, context))
        return PredicateResult.ok()


class RecordAbsent(Predicate):
    """`lookup` finds no record for the field, else 409."""

    def __init__(self, lookup: Lookup, field: str, detail: Detail, source: str = "body"):
        self.lookup = lookup
        self.field = field
        self.detail = detail
        self.source = source
        self.name = f"RecordAbsent({field})"

    async def check(self, context: RequestContext) -> PredicateResult:
        if await self.lookup(context.source(self.source).get(self.field)) is None:
            return PredicateResult.ok()
        return PredicateResult.fail(FailureReason.CONFLICT, resolve_detail(self.detail, context))


class ActionTargetExists(Predicate):
    """
    The target of a group action is given and refers to an existing user, or to
    an existing freet for `addTag`. Runs after the action itself was validated.
    """

    name = "ActionTargetExists"

    def __init__(self, find_user: Lookup, find_freet: Lookup):
        self.find_user = find_user
        self.find_freet = find_freet

    async def check(self, context: RequestContext) -> PredicateResult:
        action = GroupAction(context.body.get("action"))
        target = context.body.get(ACTION_TARGET_FIELDS[action])
        if not is_given(target):
            return PredicateResult.fail(FailureReason.INVALID, {"userOrFreetId": "User or Freet Id must be given."})

        if action == GroupAction.ADD_TAG:
            if await self.find_freet(target) is None:
                return PredicateResult.fail(FailureReason.NOT_FOUND, {"freet": "A freet with this id does not exists."})
        elif await self.find_user(target) is None:
            return PredicateResult.fail(FailureReason.NOT_FOUND, {"user": "A user with this username does not exists."})
        return PredicateResult.ok()

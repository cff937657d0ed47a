"""
Preference resolution

Turns whatever subset of preferences a client sends (for a new user, or as
an update to an existing one) into a complete, bounded UserPreferences.
Merging is field-level: supplying only ``scheduling.dailyStartTime`` keeps
every other scheduling default. Out-of-range values are rejected with
PreferenceError, never clamped.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ValidationError

from reborn.exceptions import PreferenceError
from reborn.models.preferences import PREFERENCE_GROUPS, UserPreferences

logger = logging.getLogger(__name__)

DEFAULT_USER_PREFERENCES = UserPreferences()

PartialPreferences = Union[Mapping[str, Any], UserPreferences, None]


def _field_names(model_cls: type[BaseModel]) -> dict[str, str]:
    """Map every accepted key (attribute name or wire alias) to the attribute name"""
    names = {}
    for name, info in model_cls.model_fields.items():
        names[name] = name
        if info.alias:
            names[info.alias] = name
    return names


def canonical_keys(partial: Mapping[str, Any]) -> dict[str, Any]:
    """
    Rewrite a partial preference mapping to attribute names

    Unknown keys are passed through untouched so model validation can reject
    them. A None field inside a group means "not supplied" and is dropped;
    ui extras keep their own keys and may hold None.
    """
    top_names = _field_names(UserPreferences)
    out: dict[str, Any] = {}
    for key, value in partial.items():
        name = top_names.get(key, key)
        if name in PREFERENCE_GROUPS and isinstance(value, Mapping):
            group_cls = UserPreferences.model_fields[name].annotation
            group_names = _field_names(group_cls)
            value = {group_names.get(k, k): v for k, v in value.items() if v is not None}
        elif name == "ui_extras" and isinstance(value, Mapping):
            value = dict(value)
        out[name] = value
    return out


def _deep_merge(base: dict[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in patch.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def build_preferences(
    partial: PartialPreferences = None,
    base: Optional[UserPreferences] = None
) -> UserPreferences:
    """
    Merge ``partial`` over ``base`` (defaults when omitted) and validate

    Raises pydantic.ValidationError for bound violations and TypeError for
    input that is not a mapping. Use resolve_preferences() unless you are
    inside another pydantic validator.
    """
    if isinstance(partial, UserPreferences):
        if base is None:
            return partial
        partial = partial.model_dump()
    if partial is None:
        return base or DEFAULT_USER_PREFERENCES
    if not isinstance(partial, Mapping):
        raise TypeError(
            f"Preferences must be a mapping, got {type(partial).__name__}"
        )

    patch = {k: v for k, v in canonical_keys(partial).items() if v is not None}
    start = (base or DEFAULT_USER_PREFERENCES).model_dump()
    return UserPreferences.model_validate(_deep_merge(start, patch))


def resolve_preferences(
    partial: PartialPreferences = None,
    base: Optional[UserPreferences] = None,
    user_id: Optional[str] = None
) -> UserPreferences:
    """
    Produce a fully populated preference record

    Args:
        partial: Any subset of the five preference groups (camelCase or
            snake_case keys), a complete UserPreferences, or None
        base: Current preferences when updating an existing user;
            defaults otherwise
        user_id: Included in error context

    Returns:
        UserPreferences with every group populated

    Raises:
        PreferenceError: If a supplied value is out of range, malformed
            or unknown
    """
    try:
        resolved = build_preferences(partial, base)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        logger.warning(f"Rejected preferences for user {user_id}: {e.error_count()} error(s)")
        raise PreferenceError(
            first.get("msg", "Invalid value"),
            field=field or None,
            value=first.get("input"),
            user_id=user_id,
            operation="resolve_preferences",
            cause=e,
        ) from e
    except TypeError as e:
        raise PreferenceError(
            str(e),
            value=partial,
            user_id=user_id,
            operation="resolve_preferences",
            cause=e,
        ) from e

    logger.debug(f"Resolved preferences for user {user_id}")
    return resolved


def preferences_diff(
    preferences: UserPreferences,
    base: UserPreferences = DEFAULT_USER_PREFERENCES
) -> dict[str, Any]:
    """
    Smallest wire-form partial that resolves back to ``preferences``

    resolve_preferences(preferences_diff(p)) == p for every valid p.
    """
    current = preferences.model_dump(mode="json", by_alias=True)
    reference = base.model_dump(mode="json", by_alias=True)
    diff: dict[str, Any] = {}
    for group, values in current.items():
        if group == "uiExtras":
            if values != reference[group]:
                diff[group] = values
            continue
        changed = {k: v for k, v in values.items() if reference[group].get(k) != v}
        if changed:
            diff[group] = changed
    return diff

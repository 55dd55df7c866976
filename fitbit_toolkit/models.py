"""Data representation for Fitbit API responses.

Records are immutable and built only from decoded JSON. Keys missing from a
response (or null) leave the field at the zero value of its type; unknown
keys are ignored. Keys match exactly or, failing that, case-insensitively.
"""

import typing
from dataclasses import dataclass, field, fields
from typing import Any, Dict

from fitbit_toolkit.exceptions import DecodeError


def json_field(key: str, default: Any = None, default_factory: Any = None):
    """Declare a record field backed by the JSON key ``key``."""
    if default_factory is not None:
        return field(default_factory=default_factory, metadata={"json": key})
    return field(default=default, metadata={"json": key})


class Record:
    """Base class for records decoded from the API."""

    @classmethod
    def from_dict(cls, payload: Any, path: str = ""):
        """Decode a JSON object into a record of this type."""
        if not isinstance(payload, dict):
            raise DecodeError(
                f"{path or cls.__name__}: expected a JSON object, got {type(payload).__name__}"
            )

        hints = typing.get_type_hints(cls)
        folded = {k.lower(): k for k in payload if isinstance(k, str)}
        values = {}
        for f in fields(cls):
            key = f.metadata.get("json", f.name)
            # Exact key first, then a case-insensitive match
            if key not in payload:
                key = folded.get(key.lower())
                if key is None:
                    continue
            values[f.name] = _decode(hints[f.name], payload[key], _join(path, key))
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Render the record with its JSON keys."""
        return {
            f.metadata.get("json", f.name): _encode(getattr(self, f.name))
            for f in fields(self)
        }


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _zero(tp):
    if typing.get_origin(tp) is tuple:
        return ()
    return tp()


def _decode(tp, value, path: str):
    if value is None:
        return _zero(tp)

    if typing.get_origin(tp) is tuple:
        if not isinstance(value, list):
            raise DecodeError(f"{path}: expected a JSON array, got {type(value).__name__}")
        item_type = typing.get_args(tp)[0]
        return tuple(
            _decode(item_type, item, f"{path}[{i}]") for i, item in enumerate(value)
        )

    if isinstance(tp, type) and issubclass(tp, Record):
        return tp.from_dict(value, path)

    # bool is a subclass of int, so it is excluded from the numeric types
    if tp is bool:
        ok = isinstance(value, bool)
    elif tp is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif tp is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        if ok:
            value = float(value)
    elif tp is str:
        ok = isinstance(value, str)
    else:
        raise TypeError(f"{path}: unsupported field type {tp!r}")

    if not ok:
        raise DecodeError(
            f"{path}: expected {tp.__name__}, got {type(value).__name__} ({value!r})"
        )
    return value


def _encode(value):
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_encode(item) for item in value]
    return value


@dataclass(frozen=True)
class Distance(Record):
    """Distance covered for one activity type."""

    activity: str = json_field("activity", "")
    distance: float = json_field("distance", 0.0)


@dataclass(frozen=True)
class Goals(Record):
    """Daily activity goals."""

    active_minutes: int = json_field("activeMinutes", 0)
    calories_out: int = json_field("caloriesOut", 0)
    distance: float = json_field("distance", 0.0)
    steps: int = json_field("steps", 0)


@dataclass(frozen=True)
class Summary(Record):
    """Actual activity totals for a day."""

    active_score: int = json_field("activeScore", 0)
    activity_calories: int = json_field("activityCalories", 0)
    calories_bmr: int = json_field("caloriesBMR", 0)
    calories_out: int = json_field("caloriesOut", 0)
    distances: typing.Tuple[Distance, ...] = json_field("distances", ())
    fairly_active_minutes: int = json_field("fairlyActiveMinutes", 0)
    lightly_active_minutes: int = json_field("lightlyActiveMinutes", 0)
    marginal_calories: int = json_field("marginalCalories", 0)
    sedentary_minutes: int = json_field("sedentaryMinutes", 0)
    steps: int = json_field("steps", 0)
    very_active_minutes: int = json_field("veryActiveMinutes", 0)


@dataclass(frozen=True)
class ActivitySummary(Record):
    """Goals and totals returned by the daily activity summary endpoint."""

    goals: Goals = json_field("goals", default_factory=Goals)
    summary: Summary = json_field("summary", default_factory=Summary)


@dataclass(frozen=True)
class User(Record):
    """Profile attributes of a Fitbit user."""

    stride_length_running_type: str = json_field("strideLengthRunningType", "")
    weight: float = json_field("weight", 0.0)
    age: int = json_field("age", 0)
    full_name: str = json_field("fullName", "")
    gender: str = json_field("gender", "")
    glucose_unit: str = json_field("glucoseUnit", "")
    country: str = json_field("country", "")
    stride_length_walking: float = json_field("strideLengthWalking", 0.0)
    avatar: str = json_field("avatar", "")
    encoded_id: str = json_field("encodedId", "")
    start_day_of_week: str = json_field("startDayOfWeek", "")
    avatar150: str = json_field("avatar150", "")
    corporate: bool = json_field("corporate", False)
    date_of_birth: str = json_field("dateOfBirth", "")  # 1970-01-01
    height_unit: str = json_field("heightUnit", "")
    locale: str = json_field("locale", "")
    member_since: str = json_field("memberSince", "")  # 2013-06-27
    offset_from_utc_millis: int = json_field("offsetFromUTCMillis", 0)
    average_daily_steps: int = json_field("averageDailySteps", 0)
    timezone: str = json_field("timezone", "")
    stride_length_running: float = json_field("strideLengthRunning", 0.0)
    weight_unit: str = json_field("weightUnit", "")
    distance_unit: str = json_field("distanceUnit", "")
    height: float = json_field("height", 0.0)
    stride_length_walking_type: str = json_field("strideLengthWalkingType", "")
    display_name: str = json_field("displayName", "")


@dataclass(frozen=True)
class UserProfile(Record):
    """Response of the user profile endpoint."""

    user: User = json_field("user", default_factory=User)

"""Local-override versus RMS-fallback resolution for profile fields."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from core.exceptions import InvalidDateOfBirthError
from domain.entities.profile import OverridableField, Profile
from domain.services.derived_cache import DerivedValueCache

DATE_OF_BIRTH_FORMAT = "%m-%d-%Y"

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


def parse_date_of_birth(value: Any) -> date | None:
    """Coerce date-of-birth input to a date.

    Dates (and datetimes) pass through, non-blank text is parsed as
    MM-DD-YYYY, and blank input means no date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or not str(value).strip():
        return None
    try:
        return datetime.strptime(str(value).strip(), DATE_OF_BIRTH_FORMAT).date()
    except ValueError:
        raise InvalidDateOfBirthError(str(value)) from None


def to_int(value: Any) -> int:
    """Integer coercion that never fails: leading digits or 0."""
    if value is None:
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INTEGER.match(str(value))
    return int(match.group(1)) if match else 0


def _identity(value: Any) -> Any:
    return value


def _equal(left: Any, right: Any) -> bool:
    return bool(left == right)


@dataclass(frozen=True)
class FieldSpec:
    """How a field's input is parsed and compared with the RMS value."""

    parse: Callable[[Any], Any] = _identity
    equals: Callable[[Any, Any], bool] = _equal


FIELD_SPECS: dict[OverridableField, FieldSpec] = {
    name: FieldSpec() for name in OverridableField
}
FIELD_SPECS[OverridableField.DATE_OF_BIRTH] = FieldSpec(parse=parse_date_of_birth)


class AttributeResolver:
    """Reads and writes overridable profile fields.

    Reads prefer the local override and fall back to the linked RMS person.
    Writes that match the RMS value clear the override so externally sourced
    data is never copied locally.
    """

    def __init__(self, profile: Profile, cache: DerivedValueCache | None = None) -> None:
        self._profile = profile
        self._cache = cache

    @property
    def profile(self) -> Profile:
        return self._profile

    def get(self, field: OverridableField | str) -> Any:
        """Return the effective value of a field, or None."""
        name = OverridableField(field)
        if self._cache is None:
            return self._resolve(name)
        return self._cache.cached(self._profile, name.value, lambda: self._resolve(name))

    def _resolve(self, name: OverridableField) -> Any:
        local = self._profile.local_value(name.value)
        if local is not None:
            return local
        rms_person = self._profile.rms_person
        if rms_person is not None:
            return rms_person.value_for(name.value)
        return None

    def set(self, field: OverridableField | str, value: Any) -> None:
        """Store a local override unless it equals the RMS value.

        Raises:
            ValidationError: if the field's parser rejects the input.
        """
        name = OverridableField(field)
        spec = FIELD_SPECS[name]
        parsed = spec.parse(value)

        rms_person = self._profile.rms_person
        if rms_person is not None and spec.equals(rms_person.value_for(name.value), parsed):
            self._profile.store_override(name.value, None)
        else:
            self._profile.store_override(name.value, parsed)

    def values(self) -> dict[str, Any]:
        """Effective values of every overridable field."""
        return {name.value: self.get(name) for name in OverridableField}

    # --- Height components ---

    @property
    def height_feet(self) -> int:
        return to_int(self.get(OverridableField.HEIGHT_IN_INCHES)) // 12

    @height_feet.setter
    def height_feet(self, value: Any) -> None:
        self._store_height(to_int(value) * 12 + self.height_inches)

    @property
    def height_inches(self) -> int:
        return to_int(self.get(OverridableField.HEIGHT_IN_INCHES)) % 12

    @height_inches.setter
    def height_inches(self, value: Any) -> None:
        self._store_height(self.height_feet * 12 + to_int(value))

    def _store_height(self, total: int) -> None:
        # 0 means "height unknown"
        self.set(OverridableField.HEIGHT_IN_INCHES, None if total == 0 else total)

import re
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from .exceptions import InvalidFilter

INTEGER_RE = re.compile(r'^[+-]?[0-9]+\Z')
BOOLEAN_TOKENS = {'true': True, 'false': False}


@dataclass(frozen=True)
class StringRecordFilter:
    """
    Conjunction of optional predicates over stored records.

    A field left as None imposes no constraint.
    """
    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = None

    def __post_init__(self):
        if self.contains_character is not None and len(self.contains_character) != 1:
            raise InvalidFilter("contains_character must be a single character.")
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise InvalidFilter("min_length cannot be greater than max_length.")

    def matches(self, record) -> bool:
        props = record.properties
        if self.is_palindrome is not None and props.is_palindrome != self.is_palindrome:
            return False
        if self.min_length is not None and props.length < self.min_length:
            return False
        if self.max_length is not None and props.length > self.max_length:
            return False
        if self.word_count is not None and props.word_count != self.word_count:
            return False
        if (
            self.contains_character is not None
            and self.contains_character.lower() not in record.value.lower()
        ):
            return False
        return True

    def as_dict(self) -> dict:
        """The filters that are actually set, for echoing back to clients."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def _parse_int(name, raw):
    if not INTEGER_RE.match(raw):
        raise InvalidFilter(f"{name} must be an integer.")
    return int(raw)


def parse_filters(params: Mapping[str, str]) -> StringRecordFilter:
    """
    Build a filter from raw query-string tokens.

    Unknown keys are ignored. Raises InvalidFilter on malformed values.
    """
    parsed = {}

    is_palindrome = params.get('is_palindrome')
    if is_palindrome is not None:
        if is_palindrome not in BOOLEAN_TOKENS:
            raise InvalidFilter("is_palindrome must be 'true' or 'false'.")
        parsed['is_palindrome'] = BOOLEAN_TOKENS[is_palindrome]

    for key in ('min_length', 'max_length', 'word_count'):
        raw = params.get(key)
        if raw is not None:
            parsed[key] = _parse_int(key, raw)

    contains_character = params.get('contains_character')
    if contains_character is not None:
        parsed['contains_character'] = contains_character

    return StringRecordFilter(**parsed)

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class StringProperties:
    """
    Derived properties of an analyzed string
    """
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Mapping[str, int]

    def __post_init__(self):
        # keep the frequency map read-only like the rest of the record
        object.__setattr__(
            self, 'character_frequency_map',
            MappingProxyType(dict(self.character_frequency_map)))


@dataclass(frozen=True)
class StringRecord:
    """
    A stored analysis result, keyed by the SHA-256 of its value
    """
    value: str
    properties: StringProperties
    created_at: datetime

    @property
    def id(self) -> str:
        return self.properties.sha256_hash

    def __str__(self):
        return f"{self.value[:50]} - {self.id}"

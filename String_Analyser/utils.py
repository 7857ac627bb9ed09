import hashlib
from collections import Counter

from .models import StringProperties


def compute_sha256(value: str) -> str:
    """Compute SHA-256 hash for the string.

    Lone surrogates are passed through so every ``str`` can be hashed.
    """
    return hashlib.sha256(value.encode('utf-8', 'surrogatepass')).hexdigest()


def normalize_for_palindrome(value: str) -> str:
    """Lower-case the string and drop every whitespace character."""
    return ''.join(value.lower().split())


def is_palindrome(value: str) -> bool:
    """Check if string reads the same forward and backward (case and whitespace insensitive)."""
    normalized = normalize_for_palindrome(value)
    return normalized == normalized[::-1]


def count_words(value: str) -> int:
    # blank or whitespace-only input has no words
    return len(value.split())


def analyze_string(value: str) -> StringProperties:
    """Compute all string properties.

    Lengths and counts are measured in Unicode code points.
    """
    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=len(set(value.lower())),
        word_count=count_words(value),
        sha256_hash=compute_sha256(value),
        character_frequency_map=Counter(value),
    )

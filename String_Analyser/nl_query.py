import re

from .exceptions import QueryParseError

NUMBER_WORDS = {
    'one': 1, 'two': 2, 'three': 3, 'four': 4, 'five': 5,
    'six': 6, 'seven': 7, 'eight': 8, 'nine': 9, 'ten': 10,
}
NUMBER = r'(\d+|' + '|'.join(NUMBER_WORDS) + r')'


def _to_int(token):
    if token in NUMBER_WORDS:
        return NUMBER_WORDS[token]
    return int(token)


def parse_natural_language(query: str) -> dict:
    """
    Turn a plain English query into list filters.

    e.g. "all single word palindromic strings" -> {"is_palindrome": True, "word_count": 1}

    Raises QueryParseError if the query is empty or nothing in it is recognised.
    """
    if not query or not query.strip():
        raise QueryParseError("Query parameter is required.")

    q = query.lower()
    parsed_filters = {}

    # Rule 1: palindrome-related queries
    if re.search(r'\bpalindrom', q):
        parsed_filters["is_palindrome"] = True

    # Rule 2: number of words
    if re.search(r'\b(single|one)[- ]word\b', q):
        parsed_filters["word_count"] = 1
    match = (
        re.search(r'\b' + NUMBER + r'\s+words?\b', q)
        or re.search(r'word count of ' + NUMBER, q)
    )
    if match:
        parsed_filters["word_count"] = _to_int(match.group(1))

    # Rule 3: length bounds
    match = re.search(r'longer than ' + NUMBER, q)
    if match:
        parsed_filters["min_length"] = _to_int(match.group(1)) + 1
    match = re.search(r'shorter than ' + NUMBER, q)
    if match:
        parsed_filters["max_length"] = _to_int(match.group(1)) - 1
    match = re.search(r'at least ' + NUMBER + r' char', q)
    if match:
        parsed_filters["min_length"] = _to_int(match.group(1))
    match = re.search(r'at most ' + NUMBER + r' char', q)
    if match:
        parsed_filters["max_length"] = _to_int(match.group(1))
    match = re.search(r'exactly ' + NUMBER + r' char', q)
    if match:
        parsed_filters["min_length"] = parsed_filters["max_length"] = _to_int(match.group(1))

    # Rule 4: "containing the letter x", "contains x", "with the character x"
    match = (
        re.search(r'\bcontain(?:s|ing)?\s+(?:the\s+)?(?:letter|character)\s+(\w)\b', q)
        or re.search(r'\bcontain(?:s|ing)?\s+(?:the\s+)?([a-z])\b(?!\s+words?\b)', q)
        or re.search(r'\bwith\s+the\s+(?:letter|character)\s+(\w)\b', q)
    )
    if match:
        parsed_filters["contains_character"] = match.group(1)

    # Rule 5: heuristic for "first vowel"
    if "first vowel" in q:
        parsed_filters["contains_character"] = "a"

    if not parsed_filters:
        raise QueryParseError("Unable to parse natural language query.")

    return parsed_filters

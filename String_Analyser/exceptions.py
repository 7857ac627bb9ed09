class StringAnalyzerError(Exception):
    pass


class InvalidFilter(StringAnalyzerError):
    """A list filter is malformed or the filters contradict each other."""


class StringConflict(StringAnalyzerError):
    """The value is already stored. ``record`` is the existing record."""

    def __init__(self, record):
        super().__init__("String already exists in the system.")
        self.record = record


class StringNotFound(StringAnalyzerError):
    def __init__(self, value):
        super().__init__("String does not exist in the system.")
        self.value = value


class QueryParseError(StringAnalyzerError):
    """A natural-language query could not be turned into filters."""

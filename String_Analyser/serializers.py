from django.core.validators import ProhibitNullCharactersValidator
from rest_framework import serializers


class StrictCharField(serializers.CharField):
    """
    CharField that refuses non-string input instead of coercing it.
    """
    default_error_messages = {
        'invalid_type': "Value must be a string.",
    }

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # NUL characters are kept; lone surrogates are still rejected
        self.validators = [
            v for v in self.validators
            if not isinstance(v, ProhibitNullCharactersValidator)
        ]

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail('invalid_type')
        return data


class StringPropertiesSerializer(serializers.Serializer):
    length = serializers.IntegerField()
    is_palindrome = serializers.BooleanField()
    unique_characters = serializers.IntegerField()
    word_count = serializers.IntegerField()
    sha256_hash = serializers.CharField()
    character_frequency_map = serializers.DictField(child=serializers.IntegerField())


class StringRecordSerializer(serializers.Serializer):
    """
    Representation of a stored StringRecord
    """
    id = serializers.CharField(read_only=True)
    value = serializers.CharField(read_only=True, trim_whitespace=False)
    properties = StringPropertiesSerializer(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)


class StringAnalyzeSerializer(serializers.Serializer):
    # the value is stored verbatim: no trimming, empty allowed
    value = StrictCharField(allow_blank=True, trim_whitespace=False)

    # codes for which the value was present but had the wrong type
    TYPE_ERROR_CODES = ('invalid_type', 'null')

    def is_type_error(self):
        """True when the value was given but is not a string (422 rather than 400)."""
        errors = self.errors.get('value') or []
        return any(getattr(e, 'code', None) in self.TYPE_ERROR_CODES for e in errors)

    def is_body_error(self):
        """True when the request body itself is not a JSON object."""
        return 'non_field_errors' in self.errors

    def is_missing_value(self):
        errors = self.errors.get('value') or []
        return any(getattr(e, 'code', None) == 'required' for e in errors)


class StringListResponseSerializer(serializers.Serializer):
    data = StringRecordSerializer(many=True)
    count = serializers.IntegerField()
    filters_applied = serializers.DictField()


class InterpretedQuerySerializer(serializers.Serializer):
    original = serializers.CharField()
    parsed_filters = serializers.DictField()


class NaturalLanguageResponseSerializer(serializers.Serializer):
    data = StringRecordSerializer(many=True)
    count = serializers.IntegerField()
    interpreted_query = InterpretedQuerySerializer()


class ErrorResponseSerializer(serializers.Serializer):
    """
    Serializer for error responses
    """
    error = serializers.CharField()
    details = serializers.JSONField(required=False)

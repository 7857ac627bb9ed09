import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from .exceptions import InvalidFilter, QueryParseError, StringConflict, StringNotFound
from .filters import StringRecordFilter, parse_filters
from .nl_query import parse_natural_language
from .serializers import (
    StringAnalyzeSerializer,
    StringRecordSerializer,
    StringListResponseSerializer,
    NaturalLanguageResponseSerializer,
    ErrorResponseSerializer,
)
from .store import get_store
from .throttling import StringsRateThrottle

logger = logging.getLogger(__name__)


def internal_error(exc):
    return Response({
        'error': 'Internal server error',
        'details': str(exc)
    }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


# 1️⃣ POST & GET /strings


class StringAnalyzerView(APIView):
    throttle_classes = [StringsRateThrottle]

    @swagger_auto_schema(
        request_body=StringAnalyzeSerializer,
        operation_summary="Analyze and store a new string",
        responses={
            201: StringRecordSerializer,
            400: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
            422: ErrorResponseSerializer,
        },
        tags=['Strings'],
    )
    def post(self, request):
        serializer = StringAnalyzeSerializer(data=request.data)
        if not serializer.is_valid():
            if serializer.is_type_error():
                return Response({"error": "'value' must be a string."},
                                status=status.HTTP_422_UNPROCESSABLE_ENTITY)
            if serializer.is_body_error():
                message = "Request body must be a JSON object."
            elif serializer.is_missing_value():
                message = "Missing 'value' field."
            else:
                message = "'value' contains characters that cannot be stored."
            return Response({"error": message, "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)

        try:
            record = get_store().insert(serializer.validated_data['value'])
        except StringConflict as e:
            return Response({"error": str(e), "id": e.record.id}, status=status.HTTP_409_CONFLICT)
        except Exception as e:
            logger.exception("Unexpected error storing string: %s", e)
            return internal_error(e)

        logger.info("Stored string %s (length=%d)", record.id, record.properties.length)
        return Response(StringRecordSerializer(record).data, status=status.HTTP_201_CREATED)

    @swagger_auto_schema(
        operation_summary="List all analyzed strings",
        manual_parameters=[
            openapi.Parameter(
                "is_palindrome",
                openapi.IN_QUERY,
                description="Filter by palindrome (true/false)",
                type=openapi.TYPE_STRING,
                enum=["true", "false"],
            ),
            openapi.Parameter(
                "min_length",
                openapi.IN_QUERY,
                description="Minimum string length",
                type=openapi.TYPE_INTEGER,
            ),
            openapi.Parameter(
                "max_length",
                openapi.IN_QUERY,
                description="Maximum string length",
                type=openapi.TYPE_INTEGER,
            ),
            openapi.Parameter(
                "word_count",
                openapi.IN_QUERY,
                description="Exact word count",
                type=openapi.TYPE_INTEGER,
            ),
            openapi.Parameter(
                "contains_character",
                openapi.IN_QUERY,
                description="Filter strings that contain this character (case-insensitive)",
                type=openapi.TYPE_STRING,
            ),
        ],
        responses={
            200: StringListResponseSerializer,
            400: ErrorResponseSerializer,
        },
        tags=['Strings'],
    )
    def get(self, request, *args, **kwargs):
        try:
            filters = parse_filters(request.query_params)
        except InvalidFilter as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            records = get_store().list(filters)
        except Exception as e:
            logger.exception("Unexpected error listing strings: %s", e)
            return internal_error(e)

        return Response({
            "data": StringRecordSerializer(records, many=True).data,
            "count": len(records),
            "filters_applied": filters.as_dict(),
        }, status=status.HTTP_200_OK)

# 2️⃣ GET &  DELETE  /strings/{string_value}


class StringDetailView(APIView):
    throttle_classes = [StringsRateThrottle]

    @swagger_auto_schema(
        operation_summary="Retrieve an analyzed string by its value",
        responses={200: StringRecordSerializer, 404: ErrorResponseSerializer},
        tags=['Strings'],
    )
    def get(self, request, value):
        try:
            record = get_store().get(value)
        except StringNotFound as e:
            return Response({"error": str(e)}, status=status.HTTP_404_NOT_FOUND)
        except Exception as e:
            logger.exception("Unexpected error fetching string: %s", e)
            return internal_error(e)

        return Response(StringRecordSerializer(record).data, status=status.HTTP_200_OK)

    @swagger_auto_schema(
        operation_summary="Delete an analyzed string by its value",
        responses={204: 'String deleted', 404: ErrorResponseSerializer},
        tags=['Strings'],
    )
    def delete(self, request, value):
        try:
            get_store().delete(value)
        except StringNotFound as e:
            return Response({"error": str(e)}, status=status.HTTP_404_NOT_FOUND)
        except Exception as e:
            logger.exception("Unexpected error deleting string: %s", e)
            return internal_error(e)

        logger.info("Deleted string of length %d", len(value))
        return Response(status=status.HTTP_204_NO_CONTENT)


# 3️⃣ GET /strings/filter-by-natural-language

class NaturalLanguageFilterView(APIView):
    throttle_classes = [StringsRateThrottle]

    @swagger_auto_schema(
        operation_summary="Filter analyzed strings using natural language queries",
        manual_parameters=[
            openapi.Parameter(
                "query",
                openapi.IN_QUERY,
                description="Natural language query, e.g. 'all single word palindromic strings'",
                type=openapi.TYPE_STRING,
                required=True,
            )
        ],
        responses={
            200: NaturalLanguageResponseSerializer,
            400: ErrorResponseSerializer,
            422: ErrorResponseSerializer,
        },
        tags=['Strings'],
    )
    def get(self, request):
        query = request.query_params.get("query", "")

        try:
            parsed_filters = parse_natural_language(query)
        except QueryParseError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        interpreted_query = {
            "original": query,
            "parsed_filters": parsed_filters,
        }

        try:
            filters = StringRecordFilter(**parsed_filters)
        except InvalidFilter as e:
            return Response({
                "error": f"Query parsed but resulted in conflicting filters: {e}",
                "interpreted_query": interpreted_query,
            }, status=status.HTTP_422_UNPROCESSABLE_ENTITY)

        try:
            records = get_store().list(filters)
        except Exception as e:
            logger.exception("Unexpected error filtering strings: %s", e)
            return internal_error(e)

        return Response({
            "data": StringRecordSerializer(records, many=True).data,
            "count": len(records),
            "interpreted_query": interpreted_query,
        }, status=status.HTTP_200_OK)


class IndexView(APIView):
    swagger_schema = None

    def get(self, request):
        return Response({"message": "String Analyzer API"}, status=status.HTTP_200_OK)

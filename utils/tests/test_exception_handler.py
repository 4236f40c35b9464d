from unittest.mock import MagicMock

import pytest
from rest_framework import exceptions, serializers
from rest_framework.test import APIRequestFactory

from utils.exception_handler import envelope_exception_handler
from utils.exceptions import Conflict, Forbidden, NotFound, Unauthorized, ValidationError, field_error


def context(method="post"):
    request = getattr(APIRequestFactory(), method)("/v1/anything/")
    return {"request": request, "view": MagicMock()}


class SampleSerializer(serializers.Serializer):
    email = serializers.EmailField()
    tags = serializers.ListField(child=serializers.IntegerField())


@pytest.mark.unit
class TestEnvelopeExceptionHandler:
    @pytest.mark.parametrize(
        "exc, code",
        [
            (ValidationError("An email is required to generate a token"), 400),
            (Unauthorized("Incorrect email or password"), 401),
            (Forbidden(), 403),
            (NotFound("Order does not exist"), 404),
        ],
    )
    def test_taxonomy_errors_render_message_and_status(self, exc, code):
        response = envelope_exception_handler(exc, context())

        assert response.status_code == code
        assert response.data == {"message": exc.message, "status": code}

    def test_field_errors_are_included(self):
        exc = Conflict(errors=[field_error("email", '"email" already exists')])

        response = envelope_exception_handler(exc, context())

        assert response.status_code == 409
        assert response.data["message"] == "Validation Error"
        assert response.data["errors"] == [
            {"field": "email", "location": "body", "messages": ['"email" already exists']}
        ]

    def test_serializer_errors_are_flattened(self):
        serializer = SampleSerializer(data={"email": "nope", "tags": [1, "x"]})
        assert not serializer.is_valid()

        response = envelope_exception_handler(exceptions.ValidationError(serializer.errors), context())

        assert response.status_code == 400
        assert response.data["message"] == "Validation Error"
        fields = {error["field"] for error in response.data["errors"]}
        assert fields == {"email", "tags.1"}
        assert {error["location"] for error in response.data["errors"]} == {"body"}

    def test_query_errors_are_located_in_query(self):
        exc = exceptions.ValidationError({"page": ["Ensure this value is greater than or equal to 1."]})

        response = envelope_exception_handler(exc, context("get"))

        assert response.data["errors"][0] == {
            "field": "page",
            "location": "query",
            "messages": ["Ensure this value is greater than or equal to 1."],
        }

    def test_drf_exceptions_keep_their_detail(self):
        response = envelope_exception_handler(exceptions.MethodNotAllowed("PUT"), context())

        assert response.status_code == 405
        assert response.data == {"message": 'Method "PUT" not allowed.', "status": 405}

    def test_unknown_exception_becomes_500_envelope(self):
        response = envelope_exception_handler(RuntimeError("boom"), context())

        assert response.status_code == 500
        assert response.data == {"message": "Internal Server Error", "status": 500}

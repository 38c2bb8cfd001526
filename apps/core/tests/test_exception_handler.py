import pytest
from unittest.mock import patch
from rest_framework import exceptions, status
from rest_framework.test import APIClient

from apps.core.exception_handler import envelope_exception_handler, flatten_detail
from apps.core.exceptions import (
    CodeGenerationError,
    ConflictError,
    ExpiredError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)


CONTEXT = {'view': None}


# =============================================================================
# flatten_detail
# =============================================================================

class TestFlattenDetail:

    def test_field_errors_are_prefixed(self):
        detail = {'name': ['This field is required.'], 'quantity': ['Must be positive.']}

        assert flatten_detail(detail) == 'name: This field is required.; quantity: Must be positive.'

    def test_non_field_errors_are_bare(self):
        detail = {'non_field_errors': ['At least one field must be provided']}

        assert flatten_detail(detail) == 'At least one field must be provided'

    def test_plain_string(self):
        assert flatten_detail('Not found.') == 'Not found.'


# =============================================================================
# envelope_exception_handler
# =============================================================================

class TestEnvelopeExceptionHandler:

    @pytest.mark.parametrize('exc, expected_status', [
        (NotFoundError('Group with ID x not found'), 404),
        (ForbiddenError(), 403),
        (ConflictError('Already a member'), 409),
        (InvalidStateError(), 400),
        (ExpiredError(), 400),
    ])
    def test_service_errors_keep_status(self, exc, expected_status):
        response = envelope_exception_handler(exc, CONTEXT)

        assert response.status_code == expected_status
        assert response.data['status'] == expected_status
        assert response.data['success'] is False
        assert response.data['errorMessage'] == exc.message
        assert response.data['successMessage'] is None
        assert response.data['data'] is None
        assert response.data['timestamp']

    def test_default_message(self):
        response = envelope_exception_handler(ForbiddenError(), CONTEXT)

        assert response.data['errorMessage'] == 'You do not have permission to perform this action'

    def test_internal_service_error_is_logged(self):
        with patch('apps.core.exception_handler.logger') as mock_logger:
            response = envelope_exception_handler(CodeGenerationError(), CONTEXT)

        assert response.status_code == 500
        mock_logger.error.assert_called_once()

    def test_validation_error(self):
        exc = exceptions.ValidationError({'email': ['Enter a valid email address.']})

        response = envelope_exception_handler(exc, CONTEXT)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errorMessage'] == 'email: Enter a valid email address.'

    def test_drf_not_found(self):
        response = envelope_exception_handler(exceptions.NotFound(), CONTEXT)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['success'] is False

    def test_unexpected_error_is_hidden(self):
        with patch('apps.core.exception_handler.logger') as mock_logger:
            response = envelope_exception_handler(RuntimeError('database exploded'), CONTEXT)

        assert response.status_code == 500
        assert response.data['errorMessage'] == 'Internal server error'
        mock_logger.error.assert_called_once()


@pytest.mark.django_db
class TestProjectViews:

    def test_health_check(self):
        response = APIClient().get('/api/health/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data'] == {'status': 'ok'}
        assert response.data['successMessage'] == 'Service is healthy'

    def test_unknown_route_is_enveloped(self):
        response = APIClient().get('/api/does-not-exist/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()['success'] is False

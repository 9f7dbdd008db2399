# api/exceptions.py
from rest_framework import status
from rest_framework.exceptions import APIException


class ValidationError(APIException):
    """Malformed or missing input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request'
    default_code = 'validation_error'


class AuthError(APIException):
    """Bad credentials. Token problems are reported by the JWT authentication class."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Invalid credentials'
    default_code = 'auth_error'


class ForbiddenError(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Access denied'
    default_code = 'forbidden'


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found'
    default_code = 'not_found'


# Uniqueness violations share the 400 status with validation failures
class ConflictError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Already exists'
    default_code = 'conflict'

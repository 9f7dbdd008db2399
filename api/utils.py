# api/utils.py
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"


def error_response(message, status_code=status.HTTP_400_BAD_REQUEST):
    return Response({"error": message}, status=status_code)


def first_error_message(data):
    """
    Pull a single human readable message out of a DRF error payload.

    Serializer errors are nested dicts/lists keyed by field; the first leaf wins.
    """
    if isinstance(data, dict):
        if 'detail' in data:
            return first_error_message(data['detail'])
        if not data:
            return None
        return first_error_message(next(iter(data.values())))
    if isinstance(data, list):
        return first_error_message(data[0]) if data else None
    return str(data)


def custom_exception_handler(exc, context):
    # Let REST framework build the response first so status codes and
    # WWW-Authenticate headers stay exactly as DRF decides them.
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "view",
                         exc_info=exc)
        return error_response(GENERIC_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)

    message = first_error_message(response.data) or GENERIC_ERROR_MESSAGE
    response.data = {"error": message}
    return response

"""Turn service errors into HTTP responses"""
import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from ..services import ServiceError, StoreError

logger = logging.getLogger(__name__)


def error_response(error):
    return Response(error.as_dict(), status=error.http_status)


def result_response(result, serializer_class, success_status=200):
    """Serialize a successful ServiceResult value, or render its error"""
    if not result.success:
        return error_response(result.error)
    return Response(serializer_class(result.value).data, status=success_status)


def service_exception_handler(exc, context):
    """REST framework exception handler that also renders raised ServiceErrors"""
    if isinstance(exc, ServiceError):
        if isinstance(exc, StoreError):
            logger.error(f'[STORE] {context["view"].__class__.__name__}: {exc.message} (retryable={exc.retryable})')
        return error_response(exc)
    return exception_handler(exc, context)

"""
API error taxonomy and the DRF exception handler.

Every error leaves the API as ``{"message": ...}``; validation failures add
field-level ``errors`` and answer 422.
"""
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException, PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class BusinessRuleViolation(APIException):
    """A workflow rule rejected an otherwise well-formed request."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The request violates a business rule.'
    default_code = 'business_rule_violation'


class CourseFull(BusinessRuleViolation):
    default_detail = 'Course is full'
    default_code = 'course_full'


class AlreadyEnrolled(BusinessRuleViolation):
    default_detail = 'Already enrolled in this course'
    default_code = 'already_enrolled'


class CourseNotApproved(BusinessRuleViolation):
    default_detail = 'Course is not available for enrollment'
    default_code = 'course_not_approved'


class NotEnrolled(BusinessRuleViolation):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You must be enrolled in this course to submit an assessment'
    default_code = 'not_enrolled'


class AssessmentNotPassed(BusinessRuleViolation):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Worker must pass the assessment (score >= 70) to receive a certificate'
    default_code = 'assessment_not_passed'

    def __init__(self, detail=None, code=None):
        if detail is None:
            score = settings.ASSESSMENT_PASSING_SCORE
            detail = f'Worker must pass the assessment (score >= {score}) to receive a certificate'
        super().__init__(detail, code)


class InvalidRole(PermissionDenied):
    default_detail = 'Invalid user role'
    default_code = 'invalid_role'


class GenerationError(APIException):
    """Certificate rendering or storage failed; nothing was persisted."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Error generating certificate'
    default_code = 'generation_error'


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
    if isinstance(detail, (list, tuple)) and detail:
        return _first_message(detail[0])
    return str(detail)


def api_exception_handler(exc, context):
    """Render DRF errors as ``{message}`` and log server-side failures."""
    response = exception_handler(exc, context)
    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else 'unknown'

    if response is None:
        logger.exception(f"Unhandled error in {view_name}: {exc}")
        return Response({'message': 'Server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ValidationError):
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        response.data = {
            'message': _first_message(response.data),
            'errors': response.data,
        }
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'message': str(response.data['detail'])}

    if response.status_code >= 500:
        logger.error(f"{view_name} failed with {response.status_code}: {response.data.get('message')}")

    return response

"""
Custom exceptions for Laborboard
"""
from rest_framework.exceptions import APIException


class EmployeeNotFound(APIException):
    status_code = 404
    default_detail = 'Employee not found.'
    default_code = 'employee_not_found'


class RevenueCenterNotFound(APIException):
    status_code = 404
    default_detail = 'Revenue center not found.'
    default_code = 'revenue_center_not_found'


class InvalidTargetTime(APIException):
    status_code = 400
    default_detail = 'Provide a time of day (HH:MM) or an ISO-8601 timestamp.'
    default_code = 'invalid_target_time'

"""
API views for employee check-in, edit and checkout
"""
import logging

from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.exceptions import EmployeeNotFound
from core.records import to_active_flag
from core.store import get_store
from .serializers import (
    CheckInSerializer, CheckoutSerializer, EmployeeQuerySerializer,
    EmployeeSerializer, EmployeeUpdateSerializer,
)

logger = logging.getLogger(__name__)


class EmployeeViewSet(viewsets.ViewSet):
    """
    ViewSet for shifts checked in against a revenue center

    Endpoints:
    - GET /api/employees/ - List all shifts
    - POST /api/employees/ - Check in
    - GET /api/employees/active/ - Open shifts
    - GET /api/employees/center/{name}/ - Open shifts for a center
    - GET /api/employees/center/{name}/all/ - Every shift for a center
    - PATCH /api/employees/{id}/ - Edit times, name or break minutes
    - PATCH /api/employees/{id}/checkout/ - Close the shift
    - DELETE /api/employees/{id}/ - Remove the record

    Every read and write goes through the configured labor store.
    """
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        # One clock reading per request keeps every computed figure consistent
        self.now = timezone.now()
        self.store = get_store()

    def get_serializer_context(self):
        return {'request': self.request, 'view': self, 'now': self.now}

    def _get_employee(self, pk):
        employee = self.store.get_employee(pk)
        if employee is None:
            raise EmployeeNotFound()
        return employee

    def _render(self, employees, status_code=status.HTTP_200_OK):
        many = isinstance(employees, list)
        serializer = EmployeeSerializer(employees, many=many, context=self.get_serializer_context())
        return Response(serializer.data, status=status_code)

    def _invalid(self, serializer):
        return Response(
            {'message': 'Invalid employee data', 'errors': serializer.errors},
            status=status.HTTP_400_BAD_REQUEST,
        )

    @extend_schema(parameters=[EmployeeQuerySerializer], responses=EmployeeSerializer(many=True))
    def list(self, request):
        query = EmployeeQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(
                {'message': 'Invalid filter', 'errors': query.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )
        filters = query.validated_data
        employees = self.store.list_employees()
        if 'is_active' in filters:
            wanted = to_active_flag(filters['is_active'])
            employees = [e for e in employees if to_active_flag(e.is_active) == wanted]
        if filters.get('revenue_center'):
            employees = [e for e in employees if e.revenue_center == filters['revenue_center']]
        if filters.get('name'):
            needle = filters['name'].lower()
            employees = [e for e in employees if needle in (e.name or '').lower()]
        return self._render(employees)

    @extend_schema(responses=EmployeeSerializer)
    def retrieve(self, request, pk=None):
        return self._render(self._get_employee(pk))

    @extend_schema(request=CheckInSerializer, responses={201: EmployeeSerializer})
    def create(self, request):
        serializer = CheckInSerializer(data=request.data, context=self.get_serializer_context())
        if not serializer.is_valid():
            return self._invalid(serializer)
        employee = self.store.create_employee(**serializer.validated_data)
        logger.info("Checked in %s to %s at %s", employee.name, employee.revenue_center, employee.start_time)
        return self._render(employee, status.HTTP_201_CREATED)

    @extend_schema(request=EmployeeUpdateSerializer, responses=EmployeeSerializer)
    def partial_update(self, request, pk=None):
        employee = self._get_employee(pk)
        serializer = EmployeeUpdateSerializer(
            employee, data=request.data, partial=True, context=self.get_serializer_context(),
        )
        if not serializer.is_valid():
            return self._invalid(serializer)
        employee = self.store.update_employee(pk, **serializer.validated_data)
        return self._render(employee)

    def destroy(self, request, pk=None):
        if not self.store.delete_employee(pk):
            raise EmployeeNotFound()
        logger.info("Deleted shift %s", pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=CheckoutSerializer, responses=EmployeeSerializer)
    @action(detail=True, methods=['patch'])
    def checkout(self, request, pk=None):
        """Close the shift at the given time, or now"""
        employee = self._get_employee(pk)
        if not to_active_flag(employee.is_active):
            return Response(
                {'message': 'Employee is already checked out', 'end_time': employee.end_time},
                status=status.HTTP_400_BAD_REQUEST,
            )
        serializer = CheckoutSerializer(data=request.data, context=self.get_serializer_context())
        if not serializer.is_valid():
            return self._invalid(serializer)
        end_time = serializer.validated_data.get('end_time') or self.now
        employee = self.store.checkout_employee(pk, end_time)
        logger.info("Checked out %s from %s at %s", employee.name, employee.revenue_center, end_time)
        return self._render(employee)

    @extend_schema(responses=EmployeeSerializer(many=True))
    @action(detail=False, methods=['get'])
    def active(self, request):
        """Shifts that are still open"""
        return self._render(self.store.list_active_employees())

    @extend_schema(responses=EmployeeSerializer(many=True))
    @action(detail=False, methods=['get'], url_path=r'center/(?P<center_name>[^/.]+)')
    def by_center(self, request, center_name=None):
        """Open shifts for one revenue center"""
        return self._render(self.store.list_employees_by_center(center_name))

    @extend_schema(responses=EmployeeSerializer(many=True))
    @action(detail=False, methods=['get'], url_path=r'center/(?P<center_name>[^/.]+)/all')
    def all_by_center(self, request, center_name=None):
        """Every shift recorded for one revenue center"""
        return self._render(self.store.list_all_employees_by_center(center_name))

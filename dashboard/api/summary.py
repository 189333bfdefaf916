from django.conf import settings
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework.views import APIView
from rest_framework.response import Response

from core.store import get_store
from core.utils import round_metrics
from dashboard.serializers import SummaryQuerySerializer
from reporting.centers import center_display
from reporting.services_labor import revenue_target_status, summarize


class DashboardSummaryView(APIView):
    """
    Live labor hours, perfect hours and $/hr per revenue center plus the
    house-wide totals. Clients poll this every ``refresh_seconds``.
    """

    @extend_schema(parameters=[
        OpenApiParameter('scope', str, enum=['all', 'active'],
                         description='Count every shift recorded today (default) or only open ones'),
    ])
    def get(self, request):
        query = SummaryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        now = timezone.now()
        store = get_store()
        if query.validated_data['scope'] == 'active':
            employees = store.list_active_employees()
        else:
            employees = store.list_employees()
        centers = store.list_revenue_centers()

        summary = summarize(
            employees,
            centers,
            now,
            overnight_correction=settings.LABOR_OVERNIGHT_CORRECTION,
        )
        for row in summary['centers']:
            row['display'] = center_display(row['name'])

        summary['revenue_target'] = revenue_target_status(
            summary['overall_dollars_per_hour'],
            settings.LABOR_TARGET_DOLLARS_PER_HOUR,
        )
        summary['employee_count'] = len(employees)
        summary['refresh_seconds'] = settings.LABOR_REFRESH_SECONDS
        return Response(round_metrics(summary))

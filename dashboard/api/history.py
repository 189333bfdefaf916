import logging

from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework.views import APIView
from rest_framework.response import Response

from core.exceptions import InvalidTargetTime
from core.store import get_store
from core.timezone_utils import format_local_time, resolve_wall_clock
from core.utils import round_metrics
from dashboard.serializers import HistoryQuerySerializer
from reporting.centers import center_display
from reporting.services_labor import reconstruct_at

logger = logging.getLogger(__name__)


class HistoricalLaborView(APIView):
    """
    What the labor figures read at an earlier (or the current) moment today,
    rebuilt from the employee records as they stand now.
    """

    @extend_schema(parameters=[
        OpenApiParameter('at', str, required=True,
                         description='HH:MM (today, labor timezone) or an ISO-8601 timestamp'),
    ])
    def get(self, request):
        query = HistoryQuerySerializer(data=request.query_params)
        if not query.is_valid():
            raise InvalidTargetTime()

        now = timezone.now()
        target = resolve_wall_clock(query.validated_data['at'], now)
        if target is None:
            logger.debug("Rejected history query at=%r", query.validated_data['at'])
            raise InvalidTargetTime()

        store = get_store()
        history = reconstruct_at(store.list_employees(), store.list_revenue_centers(), target)
        for row in history['centers']:
            row['display'] = center_display(row['name'])
        history['label'] = format_local_time(target)
        return Response(round_metrics(history))

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from core.exceptions import RevenueCenterNotFound
from core.store import get_store
from reporting.serializers import RevenueCenterSerializer, RevenueCenterUpdateSerializer


class RevenueCenterViewSet(viewsets.ViewSet):
    """
    Revenue centers are looked up by name. The store seeds them on first read
    and afterwards only their sales and divisor change.
    """
    lookup_field = 'name'
    lookup_value_regex = '[^/]+'
    http_method_names = ['get', 'patch', 'head', 'options']

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.store = get_store()

    def _get_center(self, name):
        center = self.store.get_revenue_center(name)
        if center is None:
            raise RevenueCenterNotFound()
        return center

    @extend_schema(responses=RevenueCenterSerializer(many=True))
    def list(self, request):
        centers = sorted(self.store.list_revenue_centers(), key=lambda c: c.name)
        return Response(RevenueCenterSerializer(centers, many=True).data)

    @extend_schema(responses=RevenueCenterSerializer)
    def retrieve(self, request, name=None):
        return Response(RevenueCenterSerializer(self._get_center(name)).data)

    @extend_schema(request=RevenueCenterUpdateSerializer, responses=RevenueCenterSerializer)
    def partial_update(self, request, name=None):
        self._get_center(name)
        serializer = RevenueCenterUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(
                {'message': 'Invalid revenue center data', 'errors': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )
        center = self.store.update_revenue_center(name, **serializer.validated_data)
        return Response(RevenueCenterSerializer(center).data)

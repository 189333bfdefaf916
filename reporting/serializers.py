from decimal import Decimal

from rest_framework import serializers

from .centers import center_display


class RevenueCenterSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    sales = serializers.FloatField(read_only=True)
    divisor = serializers.FloatField(read_only=True)
    display = serializers.SerializerMethodField()

    def get_display(self, obj) -> dict:
        return center_display(obj.name)


class RevenueCenterUpdateSerializer(serializers.Serializer):
    """Only the sales figure and the divisor are editable; names are fixed keys."""
    sales = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal('0'), required=False,
        error_messages={'min_value': 'Sales must be positive'},
    )
    divisor = serializers.DecimalField(
        max_digits=8, decimal_places=2, min_value=Decimal('0.1'), required=False,
        error_messages={'min_value': 'Divisor must be greater than 0'},
    )

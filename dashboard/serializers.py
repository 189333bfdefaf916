from rest_framework import serializers

SCOPE_CHOICES = (
    ('all', 'Every shift recorded today'),
    ('active', 'Open shifts only'),
)


class SummaryQuerySerializer(serializers.Serializer):
    scope = serializers.ChoiceField(choices=SCOPE_CHOICES, default='all', required=False)


class HistoryQuerySerializer(serializers.Serializer):
    at = serializers.CharField(
        help_text='Time of day (HH:MM, today in the labor timezone) or an ISO-8601 timestamp',
    )

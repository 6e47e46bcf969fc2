from rest_framework import serializers

from directory.client import ALL_MUNICIPALITIES


class HealthUnitQuerySerializer(serializers.Serializer):
    """
    Query string of GET /api/health-units.
    Both filters are optional; "todos" means no municipality filter.
    """
    category = serializers.CharField(allow_blank=True, default="")
    municipio = serializers.CharField(allow_blank=True, default=ALL_MUNICIPALITIES)

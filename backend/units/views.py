import logging

from django.conf import settings
from django.http import HttpResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from directory.client import DirectoryClient, DirectoryError
from .serializers import HealthUnitQuerySerializer

logger = logging.getLogger(__name__)

FETCH_ERROR = "Erro ao buscar dados"


def get_directory_client() -> DirectoryClient:
    return DirectoryClient(
        base_url=getattr(settings, 'REMOTE_API', None),
        timeout=getattr(settings, 'DIRECTORY_TIMEOUT', None),
    )


class HealthUnitsView(APIView):
    """
    Pass-through to the upstream /health-units.
    - 200: the upstream body, unmodified
    - 500: {"error": ...} for any failure, whatever the cause
    """
    def get(self, request):
        query = HealthUnitQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            client = get_directory_client()
            data = client.list_health_units(
                query.validated_data["category"],
                query.validated_data["municipio"],
            )
        except (DirectoryError, ValueError) as e:
            logger.error(f"Error fetching health units: {e}")
            return Response({"error": FETCH_ERROR}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(data)


class MunicipiosView(APIView):
    """
    Relays the upstream /municipios status and body as-is (no JSON validation).
    """
    def get(self, request):
        try:
            client = get_directory_client()
            upstream_status, body = client.list_municipalities()
        except (DirectoryError, ValueError) as e:
            logger.error(f"Error fetching municipios: {e}")
            return Response({"error": FETCH_ERROR}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return HttpResponse(body, status=upstream_status, content_type="application/json")

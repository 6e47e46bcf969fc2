import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from units.views import get_directory_client

logger = logging.getLogger(__name__)


class LogoutView(APIView):
    """
    Best-effort logout: forwards the Authorization header upstream and
    always answers 204, whatever happens there.
    """
    def post(self, request):
        try:
            client = get_directory_client()
        except ValueError as e:
            logger.warning(f"Logout not forwarded: {e}")
        else:
            client.logout(request.headers.get("Authorization"))
        return Response(status=status.HTTP_204_NO_CONTENT)

"""Rating views"""
from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..services import RatingService
from .responses import error_response


class UserRatingViewSet(viewsets.ViewSet):
    """Ratings are submitted through /profiles/{id}/rate/ and withdrawn here"""
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r'\d+'

    def destroy(self, request, pk=None):
        result = RatingService().withdraw_rating(int(pk), request.user.profile.id)
        if not result.success:
            return error_response(result.error)
        return Response(status=status.HTTP_204_NO_CONTENT)


__all__ = ['UserRatingViewSet']

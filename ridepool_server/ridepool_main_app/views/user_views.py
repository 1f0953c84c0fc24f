"""Profile views"""
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..models import UserProfile
from ..serializers import UserProfileSerializer, UserRatingSerializer, RatingRequestSerializer
from ..services import RatingService
from .responses import result_response


class UserProfileViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated]
    serializer_class = UserProfileSerializer
    queryset = UserProfile.objects.select_related('user')
    lookup_value_regex = r'\d+'

    @action(detail=False, methods=['get', 'patch'])
    def me(self, request):
        profile = request.user.profile
        if request.method == 'GET':
            return Response(self.get_serializer(profile).data)

        serializer = self.get_serializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    @action(detail=True, methods=['get'])
    def ratings(self, request, pk=None):
        profile = self.get_object()
        ratings = RatingService().ratings_for(profile.id)
        return Response(UserRatingSerializer(ratings, many=True).data)

    @action(detail=True, methods=['post'])
    def rate(self, request, pk=None):
        profile = self.get_object()
        serializer = RatingRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = RatingService().submit_rating(
            rater_id=request.user.profile.id,
            ratee_id=profile.id,
            score=serializer.validated_data['rating'],
            review=serializer.validated_data.get('review'),
        )
        return result_response(result, UserRatingSerializer, status.HTTP_201_CREATED)


__all__ = ['UserProfileViewSet']

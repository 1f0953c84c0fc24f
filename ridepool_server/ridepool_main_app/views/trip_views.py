"""Trip-related views"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..models import Trip
from ..serializers import TripSerializer, TripCreateSerializer, TripBookingRequestSerializer, TripBookingSerializer
from ..services import BookingService, TripService
from .responses import result_response


class TripViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Carpool trips.

    list supports ?from=&to= for searching bookable trips and ?mine=true
    for every trip the caller drives.
    """
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated]
    serializer_class = TripSerializer
    queryset = Trip.objects.all()
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        if self.action == 'list':
            if self.request.query_params.get('mine') in ('1', 'true', 'True'):
                trips = Trip.objects.filter(driver=self.request.user.profile).order_by('-start_time')
            else:
                trips = TripService().search_trips(
                    self.request.query_params.get('from'),
                    self.request.query_params.get('to'),
                )
        else:
            trips = Trip.objects.all()
        return trips.select_related('driver').prefetch_related('stops')

    def create(self, request, *args, **kwargs):
        serializer = TripCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = TripService().create_trip(driver_id=request.user.profile.id, **serializer.validated_data)
        return result_response(result, TripSerializer, status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def book(self, request, pk=None):
        trip = self.get_object()
        serializer = TripBookingRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = BookingService().book_trip(
            trip_id=trip.id,
            passenger_id=request.user.profile.id,
            pickup_location=data['pickup_location'],
            pickup_time=data.get('pickup_time') or trip.start_time,
            phone_number=data['phone_number'],
        )
        return result_response(result, TripBookingSerializer, status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        result = TripService().complete_trip(int(pk), request.user.profile.id)
        return result_response(result, TripSerializer)

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        result = TripService().cancel_trip(int(pk), request.user.profile.id)
        return result_response(result, TripSerializer)


__all__ = ['TripViewSet']

"""Booking-related views using BookingService"""
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..models import TripBooking, VehicleBooking
from ..serializers import TripBookingSerializer, VehicleBookingSerializer
from ..services import BookingService
from .responses import result_response


class TripBookingViewSet(viewsets.ReadOnlyModelViewSet):
    """Seats the caller has booked; created through POST /trips/{id}/book/"""
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated]
    serializer_class = TripBookingSerializer
    queryset = TripBooking.objects.all()
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        return BookingService().bookings_for_passenger(self.request.user.profile.id)

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        result = BookingService().cancel_trip_booking(int(pk), request.user.profile.id)
        return result_response(result, TripBookingSerializer)


class VehicleBookingViewSet(viewsets.ReadOnlyModelViewSet):
    """Rentals the caller has made; created through POST /vehicles/{id}/book/"""
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated]
    serializer_class = VehicleBookingSerializer
    queryset = VehicleBooking.objects.all()
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        return BookingService().vehicle_bookings_for_renter(self.request.user.profile.id)

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        result = BookingService().cancel_vehicle_booking(int(pk), request.user.profile.id)
        return result_response(result, VehicleBookingSerializer)

    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        result = BookingService().complete_vehicle_booking(int(pk), request.user.profile.id)
        return result_response(result, VehicleBookingSerializer)


__all__ = ['TripBookingViewSet', 'VehicleBookingViewSet']

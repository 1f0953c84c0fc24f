"""Vehicle listing views"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..models import VehicleListing
from ..serializers import (
    VehicleListingSerializer, VehicleListingCreateSerializer, RentalPeriodSerializer, VehicleBookingSerializer,
)
from ..services import BookingService, ListingService, ValidationError
from ..services.pricing_service import quote as price_quote, rental_duration
from .responses import error_response, result_response


class VehicleListingViewSet(viewsets.ReadOnlyModelViewSet):
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated]
    serializer_class = VehicleListingSerializer
    queryset = VehicleListing.objects.all()
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        if self.action == 'list':
            listings = ListingService().search_listings(
                self.request.query_params.get('vehicle_type'),
                self.request.query_params.get('city'),
                self.request.query_params.get('rental_type'),
            )
        else:
            listings = VehicleListing.objects.all()
        return listings.select_related('owner')

    def create(self, request, *args, **kwargs):
        serializer = VehicleListingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ListingService().create_listing(owner_id=request.user.profile.id, **serializer.validated_data)
        return result_response(result, VehicleListingSerializer, status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def quote(self, request, pk=None):
        """Price a rental without reserving anything"""
        listing = self.get_object()
        serializer = RentalPeriodSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        period = serializer.validated_data

        try:
            duration = rental_duration(listing.rental_type, **period)
            total_price = price_quote(listing, **period)
        except ValidationError as exc:
            return error_response(exc)

        return Response({
            'listing': listing.id,
            'rental_type': listing.rental_type,
            'rate': str(listing.rate),
            'duration': str(duration),
            'total_price': str(total_price),
        })

    @action(detail=True, methods=['post'])
    def book(self, request, pk=None):
        listing = self.get_object()
        serializer = RentalPeriodSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = BookingService().book_vehicle(
            listing_id=listing.id, renter_id=request.user.profile.id, **serializer.validated_data,
        )
        return result_response(result, VehicleBookingSerializer, status.HTTP_201_CREATED)


__all__ = ['VehicleListingViewSet']

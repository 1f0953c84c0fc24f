from django.urls import path, include
from rest_framework import routers

from .views import (
    TripViewSet, TripBookingViewSet, VehicleListingViewSet, VehicleBookingViewSet,
    UserProfileViewSet, UserRatingViewSet,
)

router = routers.DefaultRouter()
router.register(r"trips", TripViewSet, basename='trips')
router.register(r"trip-bookings", TripBookingViewSet, basename='trip-bookings')
router.register(r"vehicles", VehicleListingViewSet, basename='vehicles')
router.register(r"vehicle-bookings", VehicleBookingViewSet, basename='vehicle-bookings')
router.register(r"profiles", UserProfileViewSet, basename='profiles')
router.register(r"ratings", UserRatingViewSet, basename='ratings')

urlpatterns = [
    path('', include(router.urls)),
]

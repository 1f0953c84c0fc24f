from django.contrib import admin
from .models import UserProfile, Trip, TripStop, TripBooking, VehicleListing, VehicleBooking, UserRating

# Customize admin site
admin.site.site_header = "Ridepool Administration"
admin.site.site_title = "Ridepool Admin"
admin.site.index_title = "Welcome to Ridepool Admin Panel"


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ['id', 'display_name', 'get_username', 'rating', 'total_ratings', 'user_type', 'created_at']
    list_filter = ['user_type']
    search_fields = ['display_name', 'user__username', 'user__email']
    ordering = ['id']
    list_per_page = 50
    # Written by the rating aggregator only
    readonly_fields = ['rating', 'total_ratings', 'created_at', 'updated_at']

    def get_username(self, obj):
        return obj.user.username
    get_username.short_description = 'Username'
    get_username.admin_order_field = 'user__username'


class TripStopInline(admin.TabularInline):
    model = TripStop
    extra = 0


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    list_display = ['id', 'from_destination', 'to_destination', 'start_time', 'status', 'driver',
                    'available_seats', 'total_seats', 'price_per_seat']
    list_filter = ['status', 'start_time']
    search_fields = ['from_destination', 'to_destination', 'driver__display_name', 'car_number_plate']
    ordering = ['-start_time']
    date_hierarchy = 'start_time'
    list_per_page = 50
    # Written by the availability ledger only
    readonly_fields = ['available_seats', 'created_at', 'updated_at']
    autocomplete_fields = ['driver']
    inlines = [TripStopInline]


@admin.register(TripBooking)
class TripBookingAdmin(admin.ModelAdmin):
    list_display = ['id', 'trip', 'passenger', 'pickup_location', 'pickup_time', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['passenger__display_name', 'pickup_location', 'phone_number']
    ordering = ['-created_at']
    list_per_page = 50
    readonly_fields = ['status', 'created_at', 'cancelled_at']


@admin.register(VehicleListing)
class VehicleListingAdmin(admin.ModelAdmin):
    list_display = ['id', 'vehicle_model', 'vehicle_type', 'city', 'rental_type', 'rate', 'is_available', 'owner']
    list_filter = ['vehicle_type', 'rental_type', 'is_available', 'city']
    search_fields = ['vehicle_model', 'vehicle_number_plate', 'city', 'owner__display_name']
    ordering = ['-created_at']
    list_per_page = 50
    readonly_fields = ['is_available', 'created_at', 'updated_at']
    autocomplete_fields = ['owner']


@admin.register(VehicleBooking)
class VehicleBookingAdmin(admin.ModelAdmin):
    list_display = ['id', 'listing', 'renter', 'from_date', 'to_date', 'total_price', 'status']
    list_filter = ['status', 'from_date']
    search_fields = ['renter_name', 'listing__vehicle_model', 'listing__vehicle_number_plate']
    ordering = ['-created_at']
    list_per_page = 50
    readonly_fields = ['status', 'total_price', 'created_at', 'cancelled_at']


@admin.register(UserRating)
class UserRatingAdmin(admin.ModelAdmin):
    list_display = ['id', 'rater', 'ratee', 'rating', 'created_at']
    list_filter = ['rating', 'created_at']
    search_fields = ['rater__display_name', 'ratee__display_name', 'review']
    ordering = ['-created_at']
    list_per_page = 50

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        # Removed through RatingService.withdraw_rating
        return False

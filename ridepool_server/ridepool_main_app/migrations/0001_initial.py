import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='UserProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('display_name', models.CharField(max_length=100)),
                ('age', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('rating', models.FloatField(default=0.0)),
                ('total_ratings', models.PositiveIntegerField(default=0)),
                ('user_type', models.CharField(choices=[('new', 'New'), ('experienced', 'Experienced')], default='new', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('rating__gte', 0), ('rating__lte', 5)), name='userprofile_rating_range'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Trip',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('from_destination', models.CharField(max_length=120)),
                ('to_destination', models.CharField(max_length=120)),
                ('start_time', models.DateTimeField(db_index=True)),
                ('reach_time', models.DateTimeField()),
                ('total_seats', models.PositiveSmallIntegerField()),
                ('available_seats', models.PositiveSmallIntegerField()),
                ('price_per_seat', models.DecimalField(decimal_places=2, max_digits=10)),
                ('car_model', models.CharField(blank=True, default='', max_length=60)),
                ('car_color', models.CharField(blank=True, default='', max_length=30)),
                ('car_number_plate', models.CharField(blank=True, default='', max_length=20)),
                ('status', models.CharField(choices=[('active', 'Active'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], db_index=True, default='active', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('driver', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='trips', to='ridepool_main_app.userprofile')),
            ],
            options={
                'ordering': ['start_time'],
                'indexes': [models.Index(fields=['status', 'start_time'], name='trip_status_start_idx')],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('available_seats__gte', 0), ('available_seats__lte', models.F('total_seats'))), name='trip_available_seats_within_capacity'),
                ],
            },
        ),
        migrations.CreateModel(
            name='TripStop',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('stop_location', models.CharField(max_length=120)),
                ('stop_order', models.PositiveSmallIntegerField()),
                ('stop_time', models.DateTimeField()),
                ('trip', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stops', to='ridepool_main_app.trip')),
            ],
            options={
                'ordering': ['stop_order'],
                'unique_together': {('trip', 'stop_order')},
            },
        ),
        migrations.CreateModel(
            name='VehicleListing',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('vehicle_type', models.CharField(choices=[('car', 'Car'), ('bike', 'Bike')], max_length=10)),
                ('vehicle_model', models.CharField(max_length=60)),
                ('vehicle_color', models.CharField(max_length=30)),
                ('vehicle_number_plate', models.CharField(max_length=20)),
                ('city', models.CharField(db_index=True, max_length=60)),
                ('latitude', models.FloatField(blank=True, null=True)),
                ('longitude', models.FloatField(blank=True, null=True)),
                ('photos', models.JSONField(blank=True, default=list)),
                ('rental_type', models.CharField(choices=[('short_term', 'Short term (hourly)'), ('long_term', 'Long term (daily)')], max_length=20)),
                ('rate', models.DecimalField(decimal_places=2, max_digits=10)),
                ('max_rental_period', models.PositiveIntegerField()),
                ('is_available', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='vehicle_listings', to='ridepool_main_app.userprofile')),
            ],
            options={
                'indexes': [models.Index(fields=['vehicle_type', 'is_available'], name='listing_type_available_idx')],
            },
        ),
        migrations.CreateModel(
            name='TripBooking',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('pickup_location', models.CharField(max_length=120)),
                ('pickup_time', models.DateTimeField()),
                ('phone_number', models.CharField(max_length=20)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed'), ('cancelled', 'Cancelled'), ('completed', 'Completed'), ('rejected', 'Rejected')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('cancelled_at', models.DateTimeField(blank=True, null=True)),
                ('passenger', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='trip_bookings', to='ridepool_main_app.userprofile')),
                ('trip', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='ridepool_main_app.trip')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['trip', 'status'], name='tripbooking_trip_status_idx'),
                    models.Index(fields=['passenger', '-created_at'], name='tripbooking_passenger_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='VehicleBooking',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('renter_name', models.CharField(max_length=100)),
                ('from_date', models.DateField()),
                ('to_date', models.DateField()),
                ('from_time', models.TimeField()),
                ('to_time', models.TimeField()),
                ('total_price', models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed'), ('cancelled', 'Cancelled'), ('completed', 'Completed'), ('rejected', 'Rejected')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('cancelled_at', models.DateTimeField(blank=True, null=True)),
                ('listing', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='ridepool_main_app.vehiclelisting')),
                ('renter', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='vehicle_bookings', to='ridepool_main_app.userprofile')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['listing', 'status'], name='vbooking_listing_status_idx'),
                    models.Index(fields=['renter', '-created_at'], name='vbooking_renter_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('from_date__lte', models.F('to_date'))), name='vehiclebooking_dates_ordered'),
                ],
            },
        ),
        migrations.CreateModel(
            name='UserRating',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('rating', models.PositiveSmallIntegerField()),
                ('review', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('ratee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ratings_received', to='ridepool_main_app.userprofile')),
                ('rater', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ratings_given', to='ridepool_main_app.userprofile')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['ratee', 'created_at'], name='userrating_ratee_created_idx')],
                'constraints': [
                    models.UniqueConstraint(fields=('rater', 'ratee'), name='unique_rater_ratee'),
                    models.CheckConstraint(condition=models.Q(('rating__gte', 1), ('rating__lte', 5)), name='userrating_valid_range'),
                    models.CheckConstraint(condition=models.Q(('rater', models.F('ratee')), _negated=True), name='userrating_not_self'),
                ],
            },
        ),
    ]

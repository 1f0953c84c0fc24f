"""Object builders shared by the test modules"""
import threading
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth.models import User
from django.db import connection
from django.utils import timezone

from ..models import Trip, VehicleListing
from ..utils.constants import TripStatus, RentalType, VehicleType


def make_profile(username, password='pass1234'):
    user = User.objects.create_user(username, password=password)
    return user.profile


def make_trip(driver, total_seats=3, available_seats=None, status=TripStatus.ACTIVE,
              from_destination='Paris', to_destination='Lyon', start_time=None, price_per_seat='25.00'):
    start_time = start_time or timezone.now() + timedelta(days=1)
    return Trip.objects.create(
        driver=driver,
        from_destination=from_destination,
        to_destination=to_destination,
        start_time=start_time,
        reach_time=start_time + timedelta(hours=4),
        total_seats=total_seats,
        available_seats=total_seats if available_seats is None else available_seats,
        price_per_seat=Decimal(price_per_seat),
        status=status,
    )


def make_listing(owner, rental_type=RentalType.SHORT_TERM, rate='100.00', max_rental_period=24,
                 vehicle_type=VehicleType.CAR, city='Paris'):
    return VehicleListing.objects.create(
        owner=owner,
        vehicle_type=vehicle_type,
        vehicle_model='Clio',
        vehicle_color='Blue',
        vehicle_number_plate='AB-123-CD',
        city=city,
        rental_type=rental_type,
        rate=Decimal(rate),
        max_rental_period=max_rental_period,
    )


def run_in_threads(count, target):
    """Start count threads on target at the same moment and collect what each returns"""
    barrier = threading.Barrier(count)
    results = []
    lock = threading.Lock()

    def worker(index):
        try:
            barrier.wait()
            outcome = target(index)
        except Exception as exc:
            outcome = exc
        finally:
            connection.close()
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)
    return results

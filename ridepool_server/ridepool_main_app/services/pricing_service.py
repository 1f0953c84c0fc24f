"""Pricing calculator - pure functions, no store access"""

import math
from decimal import Decimal, ROUND_HALF_UP

from ..utils.constants import RentalType, BusinessRules
from .availability_ledger import DateRange
from .errors import ValidationError, DurationExceededError

SECONDS_PER_HOUR = Decimal(3600)


def _to_decimal(value, field):
    if isinstance(value, bool) or value is None:
        raise ValidationError(f'{field} must be a number', field=field)
    try:
        return Decimal(str(value))
    except ArithmeticError:
        raise ValidationError(f'{field} must be a number', field=field)


def billable_units(rental_type, duration_units):
    """
    Round a rental duration up to whole billing units.

    Short-term rentals bill per started hour, long-term rentals per started
    day. The one-day minimum for same-day long-term rentals is applied by
    quote, before the duration gets here.
    """
    duration = _to_decimal(duration_units, 'duration')
    if not duration.is_finite() or duration <= 0:
        raise ValidationError('Rental duration must be positive', field='duration')

    if rental_type not in (RentalType.SHORT_TERM, RentalType.LONG_TERM):
        raise ValidationError(f'Unknown rental type "{rental_type}"', field='rental_type')
    return math.ceil(duration)


def compute_price(rate, rental_type, duration_units, max_rental_period=None):
    """
    Total price for a rental.

    Args:
        rate: Price per hour (short_term) or per day (long_term)
        rental_type: RentalType value
        duration_units: Hours or days, may be fractional
        max_rental_period: Upper bound on billable units, None for no limit

    Returns:
        Decimal rounded to the money quantum

    Raises:
        ValidationError: Negative rate, non-positive duration, unknown type
        DurationExceededError: Billable units above max_rental_period
    """
    rate = _to_decimal(rate, 'rate')
    if not rate.is_finite() or rate < 0:
        raise ValidationError('Rate cannot be negative', field='rate')

    units = billable_units(rental_type, duration_units)
    if max_rental_period is not None and units > max_rental_period:
        raise DurationExceededError(
            f'Requested {units} units exceeds the maximum of {max_rental_period}',
            requested=units,
            max_rental_period=max_rental_period,
        )

    return (rate * units).quantize(Decimal(BusinessRules.MONEY_QUANTUM), rounding=ROUND_HALF_UP)


def rental_duration(rental_type, from_date, to_date, from_time=None, to_time=None):
    """
    Hours between the two instants for short-term, days between the dates for long-term.

    Raises:
        ValidationError: Missing short-term times, or a range that does not end after it starts
    """
    if rental_type != RentalType.LONG_TERM and (from_time is None or to_time is None):
        raise ValidationError('Short-term rentals need a start and end time', field='from_time')

    period = DateRange(from_date, to_date, from_time, to_time).validate()
    if rental_type == RentalType.LONG_TERM:
        return (to_date - from_date).days

    elapsed = period.end - period.start
    return Decimal(int(elapsed.total_seconds())) / SECONDS_PER_HOUR


def quote(listing, from_date, to_date, from_time=None, to_time=None):
    """Price a rental of the given listing"""
    duration = rental_duration(listing.rental_type, from_date, to_date, from_time, to_time)
    if listing.rental_type == RentalType.LONG_TERM:
        # Same-day long-term rentals bill the one-day minimum
        duration = max(duration, 1)
    return compute_price(listing.rate, listing.rental_type, duration, listing.max_rental_period)

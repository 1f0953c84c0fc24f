"""Rating service - one rating per (rater, ratee) pair, running mean on the profile"""

import logging

from django.db import IntegrityError, transaction

from ..utils.constants import UserType, BusinessRules
from .errors import (
    ServiceError, ValidationError, SelfRatingError, NotFoundError, DuplicateRatingError, NotOwnerError,
    StoreError,
)
from .repositories import UserProfileRepository, UserRatingRepository
from .results import ServiceResult
from .store import default_store

logger = logging.getLogger(__name__)


def _clamp_rating(value):
    return max(0.0, min(float(BusinessRules.MAX_RATING_SCORE), value))


def _user_type_for(total_ratings, current):
    if current == UserType.NEW and total_ratings >= BusinessRules.EXPERIENCED_USER_MIN_RATINGS:
        return UserType.EXPERIENCED
    return current


class RatingService:
    """Only component allowed to change a profile's rating and total_ratings"""

    def __init__(self, store=None, profiles=None, ratings=None):
        self.store = store or default_store
        self.profiles = profiles or UserProfileRepository(self.store)
        self.ratings = ratings or UserRatingRepository(self.store)

    def submit_rating(self, rater_id, ratee_id, score, review=None):
        """
        Rate another user and fold the score into their running average.

        Returns:
            ServiceResult with the new UserRating, or SelfRatingError,
            ValidationError, NotFoundError, DuplicateRatingError
        """
        if rater_id == ratee_id:
            return ServiceResult.fail(SelfRatingError())
        if (isinstance(score, bool) or not isinstance(score, int)
                or not BusinessRules.MIN_RATING_SCORE <= score <= BusinessRules.MAX_RATING_SCORE):
            return ServiceResult.fail(ValidationError(
                f'Rating must be a whole number from {BusinessRules.MIN_RATING_SCORE} '
                f'to {BusinessRules.MAX_RATING_SCORE}',
                field='rating',
            ))
        if review is not None:
            review = review.strip() or None

        try:
            with self.store.atomic():
                if not self.profiles.exists(rater_id):
                    raise NotFoundError('Please complete your profile first')
                ratee = self.profiles.get_for_update(ratee_id)
                if ratee is None:
                    raise NotFoundError(f'Profile {ratee_id} not found')
                if self.ratings.pair_exists(rater_id, ratee_id):
                    raise DuplicateRatingError()

                try:
                    with transaction.atomic(using=self.store.using):
                        rating = self.ratings.create(rater_id=rater_id, ratee_id=ratee_id, rating=score, review=review)
                except IntegrityError:
                    raise DuplicateRatingError()

                count = ratee.total_ratings
                new_rating = _clamp_rating((ratee.rating * count + score) / (count + 1))
                self.profiles.save_rating(
                    ratee, new_rating, count + 1, _user_type_for(count + 1, ratee.user_type),
                )
        except StoreError:
            raise
        except ServiceError as exc:
            logger.warning(f'[RATING] Rating {rater_id} -> {ratee_id} rejected: {exc.code}')
            return ServiceResult.fail(exc)

        logger.info(f'[RATING] {rater_id} rated {ratee_id} {score}/5; now {ratee.rating:.2f} over {ratee.total_ratings}')
        return ServiceResult.ok(rating)

    def withdraw_rating(self, rating_id, requester_id):
        """Rater deletes their rating; the score is taken back out of the average"""
        try:
            with self.store.atomic():
                rating = self.ratings.get(rating_id)
                if rating is None:
                    raise NotFoundError(f'Rating {rating_id} not found')
                if rating.rater_id != requester_id:
                    raise NotOwnerError('Only the rater can withdraw this rating')

                ratee = self.profiles.get_for_update(rating.ratee_id)
                # A concurrent withdrawal may have won the profile lock first
                rating = self.ratings.get_for_update(rating_id)
                if rating is None:
                    raise NotFoundError(f'Rating {rating_id} not found')
                count = ratee.total_ratings
                if count <= 1:
                    new_rating, new_count = BusinessRules.DEFAULT_PROFILE_RATING, 0
                else:
                    new_rating = _clamp_rating((ratee.rating * count - rating.rating) / (count - 1))
                    new_count = count - 1
                self.ratings.delete(rating)
                self.profiles.save_rating(ratee, new_rating, new_count, ratee.user_type)
        except StoreError:
            raise
        except ServiceError as exc:
            return ServiceResult.fail(exc)

        logger.info(f'[RATING] Rating {rating_id} withdrawn by {requester_id}')
        return ServiceResult.ok(ratee)

    def recompute_profile_rating(self, profile_id, dry_run=False):
        """Rebuild rating and total_ratings from the stored ratings"""
        with self.store.atomic():
            profile = self.profiles.get_for_update(profile_id)
            if profile is None:
                return None
            summary = self.ratings.summary(profile_id)
            count = summary['count'] or 0
            average = _clamp_rating(float(summary['avg'])) if count else BusinessRules.DEFAULT_PROFILE_RATING
            changed = count != profile.total_ratings or abs(average - profile.rating) > 1e-9
            if changed and not dry_run:
                self.profiles.save_rating(profile, average, count, _user_type_for(count, profile.user_type))
        if changed:
            logger.info(f'[RATING] Profile {profile_id} recomputed: {average:.2f} over {count}')
        return changed

    def ratings_for(self, profile_id):
        return self.ratings.for_ratee(profile_id)

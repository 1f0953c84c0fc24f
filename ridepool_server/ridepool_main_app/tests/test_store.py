"""Tests for the entity store and service results"""
from django.test import SimpleTestCase, TestCase

from ..models import UserProfile, UserRating
from ..services import EntityStore, ServiceResult, StoreError, NotFoundError
from .factories import make_profile


class EntityStoreTest(TestCase):
    def setUp(self):
        self.store = EntityStore()
        self.rater = make_profile('rater')
        self.ratee = make_profile('ratee')

    def test_run_returns_the_value(self):
        def rename():
            UserProfile.objects.filter(pk=self.ratee.id).update(display_name='Sam')
            return self.store.in_transaction()

        self.assertTrue(self.store.run(rename))
        self.ratee.refresh_from_db()
        self.assertEqual(self.ratee.display_name, 'Sam')

    def test_integrity_failure_rolls_back_as_store_error(self):
        def duplicate():
            UserProfile.objects.filter(pk=self.ratee.id).update(display_name='Sam')
            UserRating.objects.create(rater=self.rater, ratee=self.ratee, rating=4)
            UserRating.objects.create(rater=self.rater, ratee=self.ratee, rating=5)

        with self.assertRaises(StoreError) as ctx:
            self.store.run(duplicate)

        self.assertFalse(ctx.exception.retryable)
        self.assertEqual(ctx.exception.as_dict()['error'], 'store_error')
        self.assertFalse(UserRating.objects.exists())
        self.ratee.refresh_from_db()
        self.assertNotEqual(self.ratee.display_name, 'Sam')


class ServiceResultTest(SimpleTestCase):
    def test_unwrap(self):
        self.assertEqual(ServiceResult.ok(3).unwrap(), 3)
        with self.assertRaises(NotFoundError):
            ServiceResult.fail(NotFoundError('gone')).unwrap()

    def test_success_flag(self):
        self.assertTrue(ServiceResult.ok().success)
        self.assertFalse(ServiceResult.fail(NotFoundError()).success)

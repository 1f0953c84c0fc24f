"""Entity store - transaction boundary over the Django ORM"""
import logging
from contextlib import contextmanager

from django.db import DEFAULT_DB_ALIAS, DatabaseError, OperationalError, transaction

from .errors import StoreError

logger = logging.getLogger(__name__)


class EntityStore:
    """
    Transactional store shared by the repositories.

    Every atomic block runs in a single database transaction; on SQLite the
    connection is opened in IMMEDIATE mode so the block holds the write lock
    for its whole duration. Database failures leave the block as StoreError.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    @contextmanager
    def atomic(self):
        try:
            with transaction.atomic(using=self.using):
                yield
        except OperationalError as exc:
            logger.warning(f'[STORE] transient failure on "{self.using}": {exc}')
            raise StoreError(str(exc), retryable=True) from exc
        except DatabaseError as exc:
            logger.error(f'[STORE] transaction failed on "{self.using}": {exc}')
            raise StoreError(str(exc)) from exc

    def run(self, fn, *args, **kwargs):
        """Execute fn inside one transaction, rolling back on any raised error"""
        with self.atomic():
            return fn(*args, **kwargs)

    def in_transaction(self):
        return transaction.get_connection(self.using).in_atomic_block


default_store = EntityStore()

"""Tagged success/error result returned by service operations"""
from dataclasses import dataclass
from typing import Any, Optional

from .errors import ServiceError


@dataclass(frozen=True)
class ServiceResult:
    value: Any = None
    error: Optional[ServiceError] = None

    @property
    def success(self):
        return self.error is None

    @classmethod
    def ok(cls, value=None):
        return cls(value=value)

    @classmethod
    def fail(cls, error):
        return cls(error=error)

    def unwrap(self):
        """Return the value or raise the carried error"""
        if self.error is not None:
            raise self.error
        return self.value

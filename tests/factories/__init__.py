"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory, TaskFactory
"""

from tests.factories.base import BaseFactory, utc_now
from tests.factories.project import ProjectFactory, TaskFactory

__all__ = [
    "BaseFactory",
    "utc_now",
    "ProjectFactory",
    "TaskFactory",
]

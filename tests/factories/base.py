"""Base factory configuration for polyfactory."""

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from src.todo_api.models import utc_now

__all__ = ["BaseFactory", "utc_now"]


class BaseFactory(SQLAlchemyFactory):
    """Base factory with common configuration for all models.

    Primary keys are left to the database; relationships and foreign keys
    are set explicitly by the tests.
    """

    __is_base_factory__ = True
    __set_relationships__ = False
    __set_foreign_keys__ = False

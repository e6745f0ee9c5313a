# Models package — import all models here so Alembic can discover them.

from caseshop.models.user import User  # noqa: F401
from caseshop.models.configuration import Configuration  # noqa: F401
from caseshop.models.order import Order  # noqa: F401

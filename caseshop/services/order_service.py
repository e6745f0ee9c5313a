"""Order service — idempotent order ledger.

Responsible for:
- Finding the order for a (user, configuration) pair
- Creating it on the first checkout attempt for that pair
- Returning the existing order, unchanged, on every later attempt

An existing order keeps the amount it was created with. Retries, double
clicks and old links must all land on the same order, so the amount passed
on a later call is ignored.
"""

import logging

from sqlalchemy.exc import IntegrityError

from caseshop.extensions import db
from caseshop.models.order import Order

logger = logging.getLogger(__name__)


def _find_order(user_id, configuration_id):
    return Order.query.filter_by(
        user_id=user_id,
        configuration_id=configuration_id,
    ).first()


def get_or_create_order(user_id, configuration_id, amount):
    """Return the order for this user + configuration, creating it if needed.

    Args:
        user_id: Local user id (the identity provider's subject id)
        configuration_id: UUID of the configuration being bought
        amount: Decimal amount in currency units, used only on creation

    Returns:
        tuple: (order, created)

    Raises sqlalchemy.exc.SQLAlchemyError on database failures.
    """
    order = _find_order(user_id, configuration_id)
    if order:
        logger.info(
            f"Reusing order {order.id} for user={user_id} configuration={configuration_id}"
        )
        return order, False

    order = Order(
        user_id=user_id,
        configuration_id=configuration_id,
        amount=amount,
    )
    db.session.add(order)
    try:
        db.session.commit()
    except IntegrityError:
        # A concurrent request created the order first; its row wins.
        db.session.rollback()
        order = _find_order(user_id, configuration_id)
        if order is None:
            raise
        logger.info(f"Order {order.id} created concurrently, reusing it")
        return order, False

    logger.info(
        f"Created order {order.id} for user={user_id} "
        f"configuration={configuration_id} amount={amount}"
    )
    return order, True

"""User provisioning — make sure an identity has a local users row.

Insert-if-absent only. An existing row is returned as-is, even if the
identity now reports a different email.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from caseshop.errors import STORAGE_FAILURE, CheckoutError
from caseshop.extensions import db
from caseshop.models.user import User

logger = logging.getLogger(__name__)


def ensure_user(identity):
    """Get or create the User for an identity.

    Returns:
        tuple: (user, error)
            - On success: (User, None)
            - On database failure: (None, CheckoutError)
    """
    try:
        user = db.session.get(User, identity.id)
        if user:
            return user, None

        user = User(id=identity.id, email=identity.email or "")
        db.session.add(user)
        db.session.commit()
        logger.info(f"Provisioned user {identity.id}")
        return user, None
    except IntegrityError:
        # Another request inserted the same id between our read and write
        db.session.rollback()
        user = db.session.get(User, identity.id)
        if user:
            return user, None
        logger.error(f"User {identity.id} conflicted on insert but cannot be read back")
        return None, CheckoutError(STORAGE_FAILURE, "Could not save user")
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to provision user {identity.id}: {e}", exc_info=True)
        return None, CheckoutError(STORAGE_FAILURE, "Could not save user")

"""
Deferred extension instances.

Created here, bound to the app in create_app() via init_app().
"""

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
csrf = CSRFProtect()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],  # limits are set per route
    storage_uri="memory://",
)


@login_manager.user_loader
def load_identity(user_id):
    """Rebuild the signed-in identity from the session. Imports lazily to avoid circular deps."""
    from caseshop.services.identity_service import load_identity_from_session

    return load_identity_from_session(user_id)

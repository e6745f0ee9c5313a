"""Identity service — who is calling.

The auth provider owns sign-in. Its callback hands us the subject id and
email, which we keep in the Flask session and expose through Flask-Login's
``current_user``. Nothing here touches the database.
"""

from flask import session
from flask_login import UserMixin, current_user, login_user, logout_user

SESSION_KEY = "identity"


class Identity(UserMixin):
    """An authenticated caller as reported by the auth provider."""

    def __init__(self, identity_id, email=""):
        self.id = identity_id
        self.email = email or ""

    def __repr__(self):
        return f"<Identity {self.id}>"


def sign_in(identity):
    """Remember an identity for the rest of the browser session.

    Called by the auth provider's callback once it has verified the user.
    """
    session[SESSION_KEY] = {"id": identity.id, "email": identity.email}
    login_user(identity)


def sign_out():
    session.pop(SESSION_KEY, None)
    logout_user()


def load_identity_from_session(user_id):
    """Flask-Login user_loader hook. Returns None if the session doesn't match."""
    stored = session.get(SESSION_KEY)
    if not stored or stored.get("id") != user_id:
        return None
    return Identity(stored["id"], stored.get("email", ""))


def get_current_identity():
    """Return the caller's Identity, or None when nobody is signed in."""
    if not current_user.is_authenticated:
        return None
    return Identity(current_user.id, current_user.email)

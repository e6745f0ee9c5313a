"""User model.

Local mirror of an identity from the auth provider. The primary key is the
provider's subject id, so a row is created the first time an identity checks
out and is never rewritten by the checkout flow.
"""

from caseshop.extensions import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(255), primary_key=True)  # e.g. "kp_1a2b..."
    email = db.Column(db.String(255), nullable=False, default="")
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )

    # --- Relationships ---
    orders = db.relationship("Order", back_populates="user", lazy="dynamic")

    def __repr__(self):
        return f"<User {self.email}>"

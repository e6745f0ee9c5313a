"""Order model.

The local record of one user's intent to buy one configuration.
(user_id, configuration_id) is unique: repeated checkouts for the same pair
reuse the first row instead of creating another.
"""

import uuid

from caseshop.extensions import db


class Order(db.Model):
    __tablename__ = "orders"
    __table_args__ = (
        db.UniqueConstraint(
            "user_id", "configuration_id", name="uq_orders_user_configuration"
        ),
    )

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id = db.Column(
        db.String(255), db.ForeignKey("users.id"), nullable=False
    )
    configuration_id = db.Column(
        db.String(36), db.ForeignKey("configurations.id"), nullable=False
    )
    amount = db.Column(db.Numeric(10, 2), nullable=False)  # currency units, e.g. 14.00
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )

    # --- Relationships ---
    user = db.relationship("User", back_populates="orders")
    configuration = db.relationship("Configuration", back_populates="orders")

    def __repr__(self):
        return f"<Order {self.id} ({self.amount})>"

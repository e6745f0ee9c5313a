"""Configuration model.

A saved phone-case customization (finish, material, artwork). Rows are
written by the configurator, which lives outside this service; checkout only
reads them.
"""

import uuid

from caseshop.extensions import db


class Configuration(db.Model):
    __tablename__ = "configurations"

    # -- Valid option values --
    FINISHES = ["plain", "textured"]
    MATERIALS = ["silicone", "polycarbonate"]

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    finish = db.Column(db.String(50), nullable=False, default="plain")  # plain | textured
    material = db.Column(
        db.String(50), nullable=False, default="silicone"
    )  # silicone | polycarbonate
    image_url = db.Column(db.Text, nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )

    # --- Relationships ---
    orders = db.relationship(
        "Order", back_populates="configuration", lazy="dynamic"
    )

    def __repr__(self):
        return f"<Configuration {self.id} ({self.finish}/{self.material})>"

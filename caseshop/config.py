import os


def _int_env(name, default):
    return int(os.environ.get(name, default))


def _list_env(name, default):
    raw = os.environ.get(name, default)
    return tuple(part.strip().upper() for part in raw.split(",") if part.strip())


class Config:
    """Base configuration. Shared across all environments."""

    # --- Required ---
    SECRET_KEY = os.environ.get("SECRET_KEY")

    # Handle DATABASE_URL: some PaaS providers (Railway, Heroku) use
    # "postgres://" which SQLAlchemy 1.4+ doesn't accept.
    _db_url = os.environ.get("DATABASE_URL", "")
    if _db_url.startswith("postgres://"):
        _db_url = _db_url.replace("postgres://", "postgresql://", 1)
    SQLALCHEMY_DATABASE_URI = _db_url or None

    STRIPE_SECRET_KEY = os.environ.get("STRIPE_SECRET_KEY")
    APP_BASE_URL = os.environ.get("APP_BASE_URL", "http://localhost:3000")

    # --- Checkout ---
    CHECKOUT_CURRENCY = os.environ.get("CHECKOUT_CURRENCY", "usd").lower()
    CHECKOUT_PRODUCT_NAME = os.environ.get(
        "CHECKOUT_PRODUCT_NAME", "Custom iPhone Case"
    )
    SHIPPING_COUNTRIES = _list_env("SHIPPING_COUNTRIES", "DE,US")

    # --- Pricing (all amounts in cents) ---
    BASE_PRICE = _int_env("BASE_PRICE", 1400)
    FINISH_TEXTURED_SURCHARGE = _int_env("FINISH_TEXTURED_SURCHARGE", 200)
    MATERIAL_POLYCARBONATE_SURCHARGE = _int_env(
        "MATERIAL_POLYCARBONATE_SURCHARGE", 300
    )

    # --- SQLAlchemy ---
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }

    # --- Session / cookies ---
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    # --- WTF / CSRF ---
    # Browser clients send the token from /api/csrf-token as X-CSRFToken.
    WTF_CSRF_ENABLED = True

    @staticmethod
    def validate():
        """Fail fast if required env vars are missing."""
        required = [
            "SECRET_KEY",
            "DATABASE_URL",
            "STRIPE_SECRET_KEY",
            "APP_BASE_URL",
        ]
        missing = [v for v in required if not os.environ.get(v)]
        if missing:
            raise RuntimeError(
                f"Missing required environment variables: {', '.join(missing)}"
            )


class DevConfig(Config):
    """Local development."""

    DEBUG = True
    SESSION_COOKIE_SECURE = False


class TestConfig(Config):
    """Testing — in-memory SQLite, CSRF disabled."""

    TESTING = True
    DEBUG = True
    SECRET_KEY = "test-secret-key-not-for-production"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    STRIPE_SECRET_KEY = "sk_test_fake"
    APP_BASE_URL = "http://localhost:3000"
    CHECKOUT_CURRENCY = "usd"
    CHECKOUT_PRODUCT_NAME = "Custom iPhone Case"
    SHIPPING_COUNTRIES = ("DE", "US")
    BASE_PRICE = 1400
    FINISH_TEXTURED_SURCHARGE = 200
    MATERIAL_POLYCARBONATE_SURCHARGE = 300
    WTF_CSRF_ENABLED = False  # disable CSRF for test requests
    RATELIMIT_ENABLED = False  # disable rate limiting in tests
    SESSION_COOKIE_SECURE = False
    SERVER_NAME = "localhost"

    @staticmethod
    def validate():
        """Nothing to check: test values are hardcoded above."""
        pass


class ProdConfig(Config):
    """Production."""

    DEBUG = False
    SESSION_COOKIE_SECURE = True


config_by_name = {
    "development": DevConfig,
    "production": ProdConfig,
    "testing": TestConfig,
}

"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Product store
    store_backend: str = "memory"  # "firestore" or "memory"
    store_timeout: float = 10.0
    products_collection: str = "products"

    # Firebase project
    firebase_project_id: str = "studyskme"
    firebase_api_key: str | None = None
    firebase_auth_token: str | None = None
    firebase_storage_bucket: str = "studyskme.appspot.com"

    # Demo catalogue (memory backend and seed script)
    demo_seed: int = 42
    demo_products_per_category: int = 3

    # Authentication
    admin_api_key: str = "dev-admin-key-change-in-production"

    # Enquiries
    site_url: str = "https://catalogue-eta.vercel.app"
    contact_phone: str = "+919954352673"
    contact_whatsapp: str = "919954352673"
    contact_email: str = "info@glamouraluminium.com"

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()

import os

from dotenv import load_dotenv

# Values in a local .env file act as defaults; real environment variables win.
load_dotenv()

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./salesboard.sqlite3")

SEED_DATA_URL: str = os.getenv(
    "SEED_DATA_URL", "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
)
SEED_TIMEOUT_SECONDS: float = float(os.getenv("SEED_TIMEOUT_SECONDS", "30"))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

MODEL_MODULES = ["salesboard.features.products.models"]

TORTOISE_ORM_CONFIG = {
    "connections": {"default": DATABASE_URL},
    "apps": {
        "models": {  # This is an app label, can be anything
            "models": MODEL_MODULES,
            "default_connection": "default",
        }
    },
}

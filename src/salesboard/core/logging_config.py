import logging
import sys

from .config import LOG_LEVEL


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True # If no namespaces are specified, allow all records
        # Allow record if its name starts with any of the allowed namespaces
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app_logger = logging.getLogger("salesboard")
app_logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(log_formatter)

# --- Namespace-based Filter (Optional) ---
# To only see logs from the products feature and the app entrypoint:
#
# namespace_filter = NamespaceFilter(["salesboard.features.products", "salesboard.main"])
# console_handler.addFilter(namespace_filter)
#
# An empty list lets everything through.
if not app_logger.handlers:
    app_logger.addHandler(console_handler)

# Seeding is the only write path; keep it verbose.
logging.getLogger("salesboard.features.products.seed").setLevel(logging.DEBUG)

# Modules use logging.getLogger(__name__), so "salesboard.features.products.service"
# inherits from "salesboard.features.products" and then "salesboard".

# To print the SQL Tortoise emits:
# logging.getLogger("tortoise.db_client").setLevel(logging.DEBUG)

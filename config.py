import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./credit_engine.db")
    DB_ECHO = bool(data.get("DB_ECHO", False))
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Manual admin assignments are bounded to limit the impact of a typo
    ADMIN_CREDIT_MIN = data.get("ADMIN_CREDIT_MIN", 1)
    ADMIN_CREDIT_MAX = data.get("ADMIN_CREDIT_MAX", 200)

    # Pagination
    DEFAULT_PAGE_LIMIT = data.get("DEFAULT_PAGE_LIMIT", 50)
    MAX_PAGE_LIMIT = data.get("MAX_PAGE_LIMIT", 500)

    # Promotion codes
    DEFAULT_PROMOTION_CODE_TYPE = data.get("DEFAULT_PROMOTION_CODE_TYPE", "partner")
    REDEMPTION_MAX_ATTEMPTS = data.get("REDEMPTION_MAX_ATTEMPTS", 3)  # Re-evaluations after a slot collision

    # Balance reconciliation
    RECONCILIATION_ENABLED = bool(data.get("RECONCILIATION_ENABLED", True))

import os

# Loaded from the process environment, with local development defaults.
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./busana_reports.sqlite3")
APP_ENV: str = os.getenv("APP_ENV", "development").lower()
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Cash flow category that holds payroll-type expenses for the net profit KPI.
PAYROLL_EXPENSE_CATEGORY: str = os.getenv("PAYROLL_EXPENSE_CATEGORY", "Salaries & Benefits")

MODEL_MODULES: list[str] = [
    "busana.features.sales.models",
    "busana.features.catalog.models",
    "busana.features.ledgers.models",
]


def is_production() -> bool:
    return APP_ENV == "production"


def build_tortoise_config(db_url: str = DATABASE_URL) -> dict:
    """Tortoise ORM config for the reporting models on a single connection."""
    return {
        "connections": {"default": db_url},
        "apps": {
            "models": {
                "models": list(MODEL_MODULES),
                "default_connection": "default",
            }
        },
        "use_tz": False,
        "timezone": "UTC",
    }


# Used by aerich for schema migrations (see [tool.aerich] in pyproject.toml).
TORTOISE_ORM = build_tortoise_config()
TORTOISE_ORM["apps"]["models"]["models"].append("aerich.models")

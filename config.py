import logging
import os

import structlog
from pydantic import BaseModel, Field


class Settings(BaseModel):
    port: int = 8000
    session_path: str = Field(..., description="JSON file backing the secure store")
    checkout_delay: float = Field(2.0, ge=0, description="Simulated payment processing, seconds")
    topup_delay: float = Field(1.0, ge=0, description="Simulated top-up processing, seconds")
    wallet_balance: float = Field(250.0, ge=0)
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        port=int(os.getenv("PORT", 8000)),
        session_path=os.getenv(
            "STOREFRONT_SESSION_PATH",
            os.path.join(os.path.expanduser("~"), ".storefront", "session.json"),
        ),
        checkout_delay=float(os.getenv("STOREFRONT_CHECKOUT_DELAY", 2.0)),
        topup_delay=float(os.getenv("STOREFRONT_TOPUP_DELAY", 1.0)),
        wallet_balance=float(os.getenv("STOREFRONT_WALLET_BALANCE", 250.0)),
        log_level=os.getenv("STOREFRONT_LOG_LEVEL", "INFO"),
    )


def configure_logging(level: str = "INFO") -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
    )

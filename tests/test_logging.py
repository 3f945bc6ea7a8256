import logging

import pytest
import structlog
from structlog.testing import capture_logs

from storefront.logging import SERVICE_NAME, get_logger, setup_logging


@pytest.fixture(autouse=True)
def default_structlog():
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


def test_events_carry_service_and_component() -> None:
    logger = get_logger("storefront.catalog")

    with capture_logs() as logs:
        logger.info("product_created", product_id="p-1")

    assert logs == [
        {
            "event": "product_created",
            "log_level": "info",
            "product_id": "p-1",
            "service": SERVICE_NAME,
            "component": "storefront.catalog",
        }
    ]


def test_setup_logging_timestamps_access_log() -> None:
    access_logger = logging.getLogger("uvicorn.access")
    saved = list(access_logger.handlers)
    access_logger.handlers = []
    try:
        setup_logging("warning")

        assert access_logger.level == logging.WARNING
        assert len(access_logger.handlers) == 1
        assert access_logger.handlers[0].formatter._fmt == "%(asctime)s %(levelname)s: %(message)s"
    finally:
        access_logger.handlers = saved

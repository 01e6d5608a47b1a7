"""Tests for the structlog setup."""

import pytest
import structlog

from autohub.infrastructure.logging_config import configure_logging


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureLogging:

    def test_events_below_level_are_dropped(self, capsys):
        configure_logging("WARNING")
        log = structlog.get_logger("test")

        log.info("stock_reserved", product_id="p1")
        log.warning("stock_compensated", product_id="p1", delta=3)

        err = capsys.readouterr().err
        assert "stock_reserved" not in err
        assert "stock_compensated" in err
        assert "product_id=p1" in err

    def test_level_from_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("AUTOHUB_LOG_LEVEL", "info")
        configure_logging()

        structlog.get_logger("test").info("cart_finalized", lines_paid=2)

        assert "cart_finalized" in capsys.readouterr().err

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("LOUD")

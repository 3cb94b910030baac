"""Tests for logging configuration."""

from decimal import Decimal

import structlog

from chandlery.config.logging import (
    add_app_context,
    configure_logging,
    get_logger,
    render_decimals,
)


class TestProcessors:
    def test_render_decimals(self):
        event = {"event": "stock_low", "quantity": Decimal("1E+1"), "stock_id": 3}

        result = render_decimals(None, "warning", event)

        assert result == {"event": "stock_low", "quantity": "10", "stock_id": 3}

    def test_app_context_does_not_override(self):
        event = add_app_context(None, "info", {"event": "x", "app": "custom"})

        assert event["app"] == "custom"
        assert event["environment"] == "development"


class TestConfigureLogging:
    def test_json_output(self, caplog):
        caplog.set_level("INFO")
        configure_logging(level="INFO", json_output=True)
        try:
            get_logger("chandlery.test").info("order_created", total=Decimal("12.50"))
        finally:
            structlog.reset_defaults()

        rendered = [m for m in caplog.messages if "order_created" in m]
        assert len(rendered) == 1
        assert '"total": "12.50"' in rendered[0]

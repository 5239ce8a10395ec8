"""End-to-end tests for the click CLI against a temporary data directory."""

import pytest
import structlog
from click.testing import CliRunner

from storefront.domain.service.inventory_ledger import ReservationPolicy
from storefront.infrastructure.cli.main import cli
from storefront.infrastructure.config import Settings


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("STOREFRONT_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("STOREFRONT_USER", raising=False)
    monkeypatch.delenv("STOREFRONT_RESERVATION_POLICY", raising=False)
    yield CliRunner()
    # configure_logging bound stderr to the runner's stream
    structlog.reset_defaults()


def _run(runner, *args):
    return runner.invoke(cli, list(args))


def _seed(runner):
    assert _run(runner, "product", "add", "--name", "A", "--price", "100", "--stock", "3").exit_code == 0
    assert _run(runner, "product", "add", "--name", "B", "--price", "50", "--stock", "1").exit_code == 0
    assert _run(runner, "--user", "u1", "profile", "set", "--name", "Ana",
                "--email", "ana@example.com", "--address", "Manila").exit_code == 0
    for product_id in ("1", "1", "2"):
        assert _run(runner, "--user", "u1", "cart", "add", "--product", product_id).exit_code == 0


class TestCheckoutFlow:

    def test_place_order_and_history(self, runner):
        _seed(runner)

        result = _run(runner, "--user", "u1", "order", "place")
        assert result.exit_code == 0, result.output
        assert "Order #1" in result.output
        assert "₱250.00" in result.output

        listing = _run(runner, "product", "list")
        assert "A" in listing.output

        cart = _run(runner, "--user", "u1", "cart", "show")
        assert "Your cart is empty." in cart.output

        history = _run(runner, "--user", "u1", "order", "history", "--status", "Pending")
        assert "Order #1" in history.output

        shipped = _run(runner, "order", "status", "--id", "1", "--to", "To ship")
        assert shipped.exit_code == 0
        assert "ToShip" in shipped.output

    def test_empty_cart_error(self, runner):
        _run(runner, "--user", "u2", "profile", "set", "--address", "Cebu")
        result = _run(runner, "--user", "u2", "order", "place")
        assert result.exit_code == 1
        assert "Your cart is empty" in result.output

    def test_unknown_user_rejected(self, runner):
        result = _run(runner, "--user", "ghost", "cart", "show")
        assert result.exit_code == 1
        assert "log in" in result.output

    def test_quantity_zero_rejected(self, runner):
        _seed(runner)
        result = _run(runner, "--user", "u1", "cart", "set", "--item", "1", "--quantity", "0")
        assert result.exit_code == 1
        assert "must be positive" in result.output

    def test_malformed_product_file_reported_as_error(self, runner, tmp_path):
        data_dir = tmp_path / "data"
        data_dir.mkdir()
        (data_dir / "products.json").write_text('[{"id": "1", "name": "A"}]', encoding="utf-8")

        result = _run(runner, "product", "list")

        assert result.exit_code == 1
        assert "Malformed product record" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_summary(self, runner):
        _seed(runner)
        _run(runner, "--user", "u1", "order", "place")
        result = _run(runner, "order", "summary")
        assert "Orders:      1" in result.output
        assert "₱250.00" in result.output


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("STOREFRONT_DATA_DIR", "STOREFRONT_RESERVATION_POLICY", "STOREFRONT_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.reservation_policy is ReservationPolicy.STRICT
        assert settings.log_level == "WARNING"

    def test_lenient_policy(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_RESERVATION_POLICY", "Lenient")
        assert Settings.from_env().reservation_policy is ReservationPolicy.LENIENT

    def test_invalid_policy(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_RESERVATION_POLICY", "yolo")
        with pytest.raises(ValueError, match="strict' or 'lenient"):
            Settings.from_env()

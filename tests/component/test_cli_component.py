"""
CLI Component Tests

Usage:
    pytest tests/component/test_cli_component.py -v
"""
import pytest

from chipp.cli import EXIT_ERROR, EXIT_INSUFFICIENT, EXIT_OK, build_parser, main, run_command

pytestmark = [pytest.mark.component]


class TestParser:

    def test_deduct_arguments(self):
        args = build_parser().parse_args(["deduct", "user_1", "10", "--return-url", "https://app.test"])
        assert args.command == "deduct"
        assert args.user_id == "user_1"
        assert args.amount == 10
        assert args.return_url == "https://app.test"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


@pytest.mark.asyncio
class TestRunCommand:

    async def test_balance(self, fake_chipp, capsys):
        fake_chipp.balances["user_1"] = 11
        code = await run_command(build_parser().parse_args(["balance", "user_1"]), fake_chipp)
        assert code == EXIT_OK
        assert "user_1: 11 credits" in capsys.readouterr().out

    async def test_deduct(self, fake_chipp, capsys):
        fake_chipp.balances["user_1"] = 11
        code = await run_command(build_parser().parse_args(["deduct", "user_1", "4"]), fake_chipp)
        assert code == EXIT_OK
        assert "7 credits remaining" in capsys.readouterr().out

    async def test_deduct_insufficient_prints_payment_url(self, fake_chipp, capsys):
        code = await run_command(build_parser().parse_args(["deduct", "user_1", "4"]), fake_chipp)
        assert code == EXIT_INSUFFICIENT
        assert "https://pay.chipp.test/checkout/user_1" in capsys.readouterr().out

    async def test_payment_url(self, fake_chipp, capsys):
        args = build_parser().parse_args(["payment-url", "user_1", "--return-url", "https://app.test"])
        assert await run_command(args, fake_chipp) == EXIT_OK
        assert capsys.readouterr().out.strip() == "https://pay.chipp.test/checkout/user_1?returnTo=https://app.test"

    async def test_health(self, fake_chipp):
        args = build_parser().parse_args(["health"])
        assert await run_command(args, fake_chipp) == EXIT_OK
        fake_chipp.healthy = False
        assert await run_command(args, fake_chipp) == EXIT_ERROR


class TestMain:

    def test_missing_api_key_exits_with_error(self, monkeypatch, capsys):
        from chipp import config

        monkeypatch.setattr(config, "settings", config.ChippConfig(api_key=""))
        monkeypatch.setattr("chipp.cli.setup_logger", lambda *args, **kwargs: None)
        assert main(["balance", "user_1"]) == EXIT_ERROR
        assert "CHIPP_API_KEY" in capsys.readouterr().err

    def test_quiet_by_default(self, monkeypatch):
        from chipp import config

        levels = []
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setattr(config, "settings", config.ChippConfig(api_key=""))
        monkeypatch.setattr("chipp.cli.setup_logger", lambda name, level=None: levels.append(level))

        main(["balance", "user_1"])
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        main(["balance", "user_1"])
        main(["--log-level", "DEBUG", "balance", "user_1"])

        assert levels == ["WARNING", "INFO", "DEBUG"]

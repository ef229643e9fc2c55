"""Tests for the settlement watcher CLI."""

from intent_router.cli.watch import build_parser, main
from intent_router.config import Settings
from tests.helpers import CHANNEL


class TestBuildParser:
    def test_defaults_from_settings(self):
        settings = Settings.from_env({"RPC_URL": "http://localhost:8545", "INTENT_CHANNEL": CHANNEL})
        args = build_parser(settings).parse_args([])
        assert args.rpc == "http://localhost:8545"
        assert args.channel == CHANNEL
        assert args.from_block is None
        assert not args.verbose

    def test_flags_override_settings(self):
        args = build_parser(Settings.from_env({})).parse_args(["--rpc", "http://node", "--from-block", "42", "-v"])
        assert args.rpc == "http://node"
        assert args.from_block == 42
        assert args.verbose


class TestMain:
    def test_missing_rpc_fails(self, monkeypatch, capsys):
        monkeypatch.delenv("RPC_URL", raising=False)
        assert main(["--channel", CHANNEL]) == 1
        assert "--rpc" in capsys.readouterr().out

    def test_invalid_channel_fails(self, monkeypatch, capsys):
        monkeypatch.delenv("INTENT_CHANNEL", raising=False)
        assert main(["--rpc", "http://node", "--channel", "nope"]) == 1
        assert "--channel" in capsys.readouterr().out

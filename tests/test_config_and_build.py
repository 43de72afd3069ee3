import os
import tempfile
import textwrap
import unittest
from unittest import mock

from hey.config import AppConfig, ConfigError, load_config, parse_config, resolve_config_path
from hey.notify.plivo_sms import PlivoNotifier
from hey.notify.slack import SlackNotifier
from hey.notify.twilio_sms import TwilioNotifier
from hey.runner import build_notifiers


FULL_CONFIG = textwrap.dedent(
    """
    [slack]
    url = "https://hooks.slack.com/services/T/B/X"
    icon_emoji = ":tada:"

    [twilio]
    account_sid = "AC123"
    auth_token_env = "HEY_TEST_TWILIO_TOKEN"
    to = "+15550001"
    from = "+15550002"

    [plivo]
    auth_id = "MA123"
    auth_token = "secret"
    to = "15550001"
    from = "15550002"
    template = "{{ result.command|truncatechars(20) }}"
    """
)


class TestConfigAndBuild(unittest.TestCase):
    def _write(self, td: str, content: str) -> str:
        path = os.path.join(td, ".hey.toml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_load_config_parses_all_sections(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = self._write(td, FULL_CONFIG)
            with mock.patch.dict(os.environ, {"HEY_TEST_TWILIO_TOKEN": "from-env"}):
                config = load_config(path)

        assert config.slack is not None and config.twilio is not None and config.plivo is not None
        self.assertEqual(config.slack.url, "https://hooks.slack.com/services/T/B/X")
        self.assertEqual(config.slack.username, "Hey!")
        self.assertEqual(config.slack.icon_emoji, ":tada:")
        self.assertIsNone(config.slack.template)
        self.assertEqual(config.twilio.auth_token, "from-env")
        self.assertEqual(config.twilio.from_, "+15550002")
        self.assertEqual(config.plivo.template, "{{ result.command|truncatechars(20) }}")

    def test_build_notifiers_uses_fixed_order(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = self._write(td, FULL_CONFIG)
            with mock.patch.dict(os.environ, {"HEY_TEST_TWILIO_TOKEN": "t"}):
                notifiers = build_notifiers(load_config(path))

        self.assertEqual([n.channel() for n in notifiers], ["plivo", "twilio", "slack"])
        self.assertIsInstance(notifiers[0], PlivoNotifier)
        self.assertIsInstance(notifiers[1], TwilioNotifier)
        self.assertIsInstance(notifiers[2], SlackNotifier)

    def test_build_notifiers_contains_only_configured_channels(self) -> None:
        slack = {"url": "https://hooks.example.com/x"}
        twilio = {"account_sid": "a", "auth_token": "b", "to": "c", "from": "d"}
        plivo = {"auth_id": "a", "auth_token": "b", "to": "c", "from": "d"}
        cases = [
            ({}, []),
            ({"slack": slack}, ["slack"]),
            ({"slack": slack, "twilio": twilio}, ["twilio", "slack"]),
            ({"slack": slack, "plivo": plivo}, ["plivo", "slack"]),
            ({"twilio": twilio, "plivo": plivo}, ["plivo", "twilio"]),
        ]
        for raw, expected in cases:
            with self.subTest(sections=sorted(raw)):
                notifiers = build_notifiers(parse_config(raw))
                self.assertEqual([n.channel() for n in notifiers], expected)

    def test_empty_config_has_no_channels(self) -> None:
        self.assertEqual(parse_config({}), AppConfig())
        self.assertEqual(build_notifiers(AppConfig()), ())

    def test_missing_required_field_is_config_error(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            parse_config({"twilio": {"account_sid": "a", "auth_token": "b", "to": "c"}})
        self.assertIn("$.twilio.from", str(ctx.exception))

    def test_unset_env_reference_is_config_error(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigError):
                parse_config({"slack": {"url_env": "HEY_TEST_MISSING_URL"}})

    def test_section_must_be_a_table(self) -> None:
        with self.assertRaises(ConfigError):
            parse_config({"slack": "https://hooks.example.com/x"})

    def test_malformed_toml_is_config_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = self._write(td, "[slack\nurl = ")
            with self.assertRaises(ConfigError):
                load_config(path)

    def test_unreadable_file_is_config_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ConfigError):
                load_config(os.path.join(td, "missing.toml"))


def test_resolve_config_path_prefers_env(tmp_path) -> None:  # noqa: ANN001
    explicit = tmp_path / "custom.toml"
    explicit.write_text("", encoding="utf-8")
    assert resolve_config_path({"HEY_CONFIG": str(explicit)}) == explicit


def test_resolve_config_path_env_must_exist(tmp_path) -> None:  # noqa: ANN001
    import pytest

    with pytest.raises(ConfigError):
        resolve_config_path({"HEY_CONFIG": str(tmp_path / "nope.toml")})


def test_resolve_config_path_falls_back_to_cwd(tmp_path, monkeypatch) -> None:  # noqa: ANN001
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)

    assert resolve_config_path({}) is None

    (work / ".hey.toml").write_text("", encoding="utf-8")
    assert resolve_config_path({}) == work / ".hey.toml"

    (home / ".hey.toml").write_text("", encoding="utf-8")
    assert resolve_config_path({}) == home / ".hey.toml"

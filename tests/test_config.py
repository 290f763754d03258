import json

import pytest

from easyguide.config import ConfigService


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"files": {"settings": {"profileImage": {"folder": "profile"}}}}))
    return str(path)


class TestConfigService:
    def test_flat_and_dotted_keys(self, settings_file):
        config = ConfigService({"MAIL_SERVER": "smtp.test", "lowercase": 1}, config_file=settings_file)
        assert config.get("MAIL_SERVER") == "smtp.test"
        assert config.get("lowercase") is None
        assert config.get("files.settings.profileImage") == {"folder": "profile"}
        assert config.get("files.settings.missing", "fallback") == "fallback"

    def test_require_lists_missing_keys(self):
        config = ConfigService({"A": "1", "B": ""})
        config.require("A")
        with pytest.raises(RuntimeError, match="B, C"):
            config.require("A", "B", "C")

    @pytest.mark.parametrize("env, expected", [
        ("test", (True, False, False)),
        ("production", (False, True, False)),
        ("development", (False, False, True)),
    ])
    def test_environment_predicates(self, env, expected):
        config = ConfigService({"APP_ENV": env.upper()})
        assert (config.is_test(), config.is_production(), config.is_development()) == expected

    def test_describe_masks_secrets(self):
        lines = ConfigService({"STRIPE_PRIVATE_KEY": "sk_live_123", "PORT": 5000}).describe()
        assert "STRIPE_PRIVATE_KEY=***" in lines
        assert "PORT=5000" in lines

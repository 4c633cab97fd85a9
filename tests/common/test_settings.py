"""Tests for vendor_onboarding/common/settings.py"""

from vendor_onboarding.common.settings import DEFAULT_GEMINI_MODEL, DEFAULT_RIBBON_BASE_URL, Settings


class TestSettingsFromEnv:
    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GEMINI_API_KEY", "key-123")
        monkeypatch.setenv("RIBBON_BASE_URL", "https://ribbon.example/api/")
        monkeypatch.setenv("SHOPIFY_STORE_URL", "acme.myshopify.com")
        monkeypatch.setenv("SHOPIFY_ACCESS_TOKEN", "shpat_x")

        settings = Settings.from_env(tmp_path / "missing.env")

        assert settings.gemini_api_key == "key-123"
        assert settings.ribbon_base_url == "https://ribbon.example/api"
        assert settings.shopify_store_url == "acme.myshopify.com"
        assert settings.shopify_access_token == "shpat_x"

    def test_defaults(self, monkeypatch, tmp_path):
        for name in ("GEMINI_API_KEY", "GEMINI_MODEL", "RIBBON_BASE_URL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env(tmp_path / "missing.env")

        assert settings.gemini_api_key == ""
        assert settings.gemini_model == DEFAULT_GEMINI_MODEL
        assert settings.ribbon_base_url == DEFAULT_RIBBON_BASE_URL

    def test_loads_env_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("GEMINI_MODEL", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("GEMINI_MODEL=gemini-test\n", encoding="utf-8")

        settings = Settings.from_env(env_file)

        assert settings.gemini_model == "gemini-test"

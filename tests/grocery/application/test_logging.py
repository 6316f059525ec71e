import logging

import structlog
from grocery.utils.logging import bind_context, clear_context, configure_logging, current_env, get_log_level


class TestLogLevel:
    def test_level_follows_environment(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert current_env() == "production"
        assert get_log_level() == "INFO"

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("ENVIRONMENT", "production")
        assert get_log_level() == "DEBUG"

    def test_environment_takes_precedence_over_protean_env(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("PROTEAN_ENV", "test")
        assert current_env() == "staging"


class TestConfigureLogging:
    def test_log_files_created(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        root = logging.getLogger()
        saved = root.handlers[:], root.level
        try:
            configure_logging(tmp_path)
            logging.getLogger("grocery.test").error("checkout exploded")
            for handler in root.handlers:
                handler.flush()

            assert (tmp_path / "grocery.log").exists()
            assert "checkout exploded" in (tmp_path / "grocery_error.log").read_text()
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers, level = saved
            root.setLevel(level)
            structlog.reset_defaults()


class TestLogContext:
    def test_bind_and_clear(self):
        clear_context()
        bind_context(cart_id="cart-001")
        assert structlog.contextvars.get_contextvars() == {"cart_id": "cart-001"}
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

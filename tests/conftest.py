import json
import logging

import pytest

from restock_bot.config import load_settings

ENV = {
    "EMAIL": "gamer@example.com",
    "PASSWORD": "hunter2",
    "TWILIO_ACCOUNT_SID": "AC" + "0" * 32,
    "TWILIO_AUTH_TOKEN": "token",
    "TO_NUMBER": "+15550001111",
    "TWILIO_NUMBER": "+15559998888",
}


@pytest.fixture
def env():
    return dict(ENV)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "watch_config.json"
    path.write_text(json.dumps({
        "settings": {
            "element_timeout_ms": 500,
            "logging": {"level": "DEBUG", "log_dir": str(tmp_path / "logs")},
        }
    }))
    return path


@pytest.fixture
def settings(config_file, env):
    return load_settings(str(config_file), env)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handlers installed by setup_logging"""
    root = logging.getLogger()
    purchases = logging.getLogger('purchases')
    saved = (list(root.handlers), root.level, list(purchases.handlers), purchases.level)
    yield
    for logger, handlers in ((root, saved[0]), (purchases, saved[2])):
        for handler in list(logger.handlers):
            if handler not in handlers:
                logger.removeHandler(handler)
                handler.close()
        for handler in handlers:
            if handler not in logger.handlers:
                logger.addHandler(handler)
    root.setLevel(saved[1])
    purchases.setLevel(saved[3])

import pytest

import run
from api.config import ProductionConfig
from core.schemas import ParserFeature


def test_build_app_picks_config_by_env():
    app = run.build_app("PROD")
    assert app.config["DEBUG"] is ProductionConfig.DEBUG is False
    provider = app.extensions["jsonbridge"]
    assert ParserFeature.USE_BIG_DECIMAL in provider.config.parser_features


def test_build_app_reads_flask_env(monkeypatch):
    monkeypatch.setenv("FLASK_ENV", "testing")
    assert run.build_app().config["TESTING"] is True


def test_build_app_rejects_unknown_env():
    with pytest.raises(ValueError, match="staging"):
        run.build_app("staging")

# encoding: utf-8
import pytest

import kioskdir.model as model
from kioskdir.common import config
from kioskdir.config.environment import update_config
from kioskdir.exceptions import KioskConfigurationException


@pytest.fixture
def restore_engine():
    engine = model.meta.engine
    yield
    model.init_model(engine)


@pytest.mark.usefixtures("kioskdir_config", "restore_engine")
class TestUpdateConfig(object):
    def test_env_var_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("KIOSKDIR_STORAGE_PATH", str(tmp_path))
        update_config()
        assert config["kioskdir.storage_path"] == str(tmp_path)

    def test_values_are_normalized(self, monkeypatch):
        monkeypatch.setitem(config, "kioskdir.positions.lock_timeout", "20")
        update_config()
        assert config["kioskdir.positions.lock_timeout"] == 20

    def test_invalid_configuration(self, monkeypatch):
        monkeypatch.setitem(
            config, "kioskdir.positions.lock_timeout", "forever")
        with pytest.raises(KioskConfigurationException) as e:
            update_config()
        assert "kioskdir.positions.lock_timeout" in str(e.value)

    def test_engine_is_bound(self):
        update_config()
        assert model.meta.engine.url.render_as_string() == \
            config["sqlalchemy.url"]

    def test_missing_storage_is_reported(self, monkeypatch, tmp_path, caplog):
        monkeypatch.setitem(
            config, "kioskdir.storage_path", str(tmp_path / "missing"))
        update_config()
        assert "is not a directory" in caplog.text


@pytest.mark.kioskdir_config("kioskdir.positions.lock_timeout", 42)
def test_config_mark(kioskdir_config):
    assert kioskdir_config["kioskdir.positions.lock_timeout"] == 42


def test_config_mark_does_not_leak():
    assert config["kioskdir.positions.lock_timeout"] == 0

# encoding: utf-8
import os

import pytest

from kioskdir.cli import load_config, read_config
from kioskdir.exceptions import KioskConfigurationException


def _write(path, text):
    path.write_text(text)
    return str(path)


class TestReadConfig(object):
    def test_here_is_interpolated(self, tmp_path):
        ini = _write(tmp_path / "kioskdir.ini", (
            "[app:main]\n"
            "sqlalchemy.url = sqlite:///%(here)s/kioskdir.db\n"))
        conf = read_config(ini)
        assert conf["sqlalchemy.url"] == "sqlite:///{}/kioskdir.db".format(
            tmp_path)
        assert conf["__file__"] == ini

    def test_only_own_options(self, tmp_path, monkeypatch):
        monkeypatch.setenv("KIOSKDIR_SITE", "lobby")
        ini = _write(tmp_path / "kioskdir.ini", (
            "[app:main]\n"
            "kioskdir.storage_path = /srv/%(KIOSKDIR_SITE)s\n"))
        conf = read_config(ini)
        assert conf == {
            "kioskdir.storage_path": "/srv/lobby", "__file__": ini}

    def test_percent_in_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("KIOSKDIR_SECRET", "50%off")
        ini = _write(tmp_path / "kioskdir.ini",
                     "[app:main]\nsqlalchemy.url = sqlite://\n")
        assert read_config(ini)["sqlalchemy.url"] == "sqlite://"

    def test_use_chain(self, tmp_path):
        (tmp_path / "base").mkdir()
        _write(tmp_path / "base" / "base.ini", (
            "[app:main]\n"
            "sqlalchemy.url = sqlite:///%(here)s/base.db\n"
            "kioskdir.positions.lock_timeout = 100\n"))
        ini = _write(tmp_path / "local.ini", (
            "[app:main]\n"
            "use = config:base/base.ini\n"
            "kioskdir.positions.lock_timeout = 200\n"))
        conf = read_config(ini)
        # %(here)s is the directory of the file using it
        assert conf["sqlalchemy.url"] == "sqlite:///{}/base.db".format(
            tmp_path / "base")
        assert conf["kioskdir.positions.lock_timeout"] == "200"
        assert "use" not in conf

    def test_circular_chain(self, tmp_path):
        _write(tmp_path / "a.ini", "[app:main]\nuse = config:b.ini\n")
        ini = _write(tmp_path / "b.ini", "[app:main]\nuse = config:a.ini\n")
        with pytest.raises(KioskConfigurationException) as e:
            read_config(ini)
        assert "include each other" in str(e.value)

    def test_missing_file(self, tmp_path):
        with pytest.raises(KioskConfigurationException) as e:
            read_config(str(tmp_path / "missing.ini"))
        assert "Can not read" in str(e.value)

    def test_missing_section(self, tmp_path):
        ini = _write(tmp_path / "kioskdir.ini", "[server]\nport = 80\n")
        with pytest.raises(KioskConfigurationException) as e:
            read_config(ini)
        assert "[app:main]" in str(e.value)

    def test_malformed_file(self, tmp_path):
        ini = _write(tmp_path / "kioskdir.ini", "sqlalchemy.url = x\n")
        with pytest.raises(KioskConfigurationException) as e:
            read_config(ini)
        assert "Malformed" in str(e.value)


class TestLoadConfig(object):
    def test_explicit_path_wins(self, tmp_path, monkeypatch):
        ini = _write(tmp_path / "given.ini",
                     "[app:main]\nsqlalchemy.url = sqlite://\n")
        monkeypatch.setenv("KIOSKDIR_INI", str(tmp_path / "other.ini"))
        assert load_config(ini)["__file__"] == ini

    def test_from_environment(self, tmp_path, monkeypatch):
        ini = _write(tmp_path / "env.ini",
                     "[app:main]\nsqlalchemy.url = sqlite://\n")
        monkeypatch.setenv("KIOSKDIR_INI", ini)
        assert load_config()["__file__"] == ini

    def test_from_working_directory(self, tmp_path, monkeypatch):
        _write(tmp_path / "kioskdir.ini",
               "[app:main]\nsqlalchemy.url = sqlite://\n")
        monkeypatch.delenv("KIOSKDIR_INI", raising=False)
        monkeypatch.chdir(tmp_path)
        assert load_config()["__file__"] == os.path.join(
            str(tmp_path), "kioskdir.ini")

    def test_nothing_found(self, tmp_path, monkeypatch):
        monkeypatch.delenv("KIOSKDIR_INI", raising=False)
        monkeypatch.chdir(tmp_path)
        with pytest.raises(KioskConfigurationException) as e:
            load_config()
        assert "--config" in str(e.value)

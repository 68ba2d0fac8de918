# encoding: utf-8
import pytest

import kioskdir.model as model
from kioskdir.cli.cli import kioskdir


@pytest.mark.usefixtures("non_clean_db")
class TestDb(object):
    def test_version_is_head(self, cli):
        result = cli.invoke(kioskdir, ["db", "version"])
        assert not result.exit_code, result.output
        assert model.repo.current_version() in result.output

    def test_init_is_idempotent(self, cli):
        result = cli.invoke(kioskdir, ["db", "init"])
        assert not result.exit_code, result.output
        assert "Initialising DB: SUCCESS" in result.output
        assert model.repo.are_tables_created()

    def test_clean_asks_for_confirmation(self, cli):
        result = cli.invoke(kioskdir, ["db", "clean"], input="n\n")
        assert result.exit_code == 1
        assert model.repo.are_tables_created()


def test_missing_config_file(cli):
    result = cli.invoke(kioskdir, ["-c", "/nonexistent.ini", "db", "version"])
    assert result.exit_code == 1
    assert "Can not read kioskdir config file" in result.output

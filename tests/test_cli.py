import pytest

from dicterm import __main__ as cli
from dicterm import db
from dicterm.config import DictermConfig, parse_intervals


@pytest.fixture(autouse=True)
def restore_config(monkeypatch):
    # main() writes overrides onto the config class
    for attr in ("DICPATH", "DATA_DIR", "LEITNER_INTERVALS", "AUTOSAVE"):
        monkeypatch.setattr(DictermConfig, attr, getattr(DictermConfig, attr))
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)


class TestConfig:

    def test_parse_intervals(self):
        assert parse_intervals("1, 2,4") == [1, 2, 4]

    def test_parse_intervals_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_intervals("1,two")

    def test_intervals_read_from_env_on_first_use(self, monkeypatch):
        monkeypatch.setenv("DICTERM_INTERVALS", "2,5")
        monkeypatch.setattr(DictermConfig, "LEITNER_INTERVALS", None)
        assert DictermConfig.leitner_intervals() == [2, 5]

    def test_bad_env_intervals_raise_on_use(self, monkeypatch):
        monkeypatch.setenv("DICTERM_INTERVALS", "1,two")
        monkeypatch.setattr(DictermConfig, "LEITNER_INTERVALS", None)
        with pytest.raises(ValueError):
            DictermConfig.leitner_intervals()

    def test_override_skips_none(self, tmp_path):
        before = DictermConfig.DICPATH
        DictermConfig.override(dicpath=None, data_dir=tmp_path)
        assert DictermConfig.DICPATH == before
        assert DictermConfig.DATA_DIR == tmp_path
        assert DictermConfig.leitner_db_path() == tmp_path / "leitner.db"

    def test_override_unknown_setting(self):
        with pytest.raises(AttributeError):
            DictermConfig.override(colour="red")


class TestCommands:

    def test_import_then_list(self, tmp_path, capsys):
        source = tmp_path / "words.tsv"
        source.write_text("word\tdefinition\ncat\tmeows\ndog\tbarks\n", encoding="utf-8")
        dicts = tmp_path / "dicts"

        assert cli.main(["--dicpath", str(dicts), "import", "pets", str(source)]) == 0
        assert db.count_entries(dicts / "pets.db") == 2

        assert cli.main(["--dicpath", str(dicts), "list"]) == 0
        out = capsys.readouterr().out
        assert "pets" in out

    def test_list_empty_directory(self, tmp_path, capsys):
        assert cli.main(["--dicpath", str(tmp_path), "list"]) == 1
        assert "No dictionaries" in capsys.readouterr().out

    def test_import_missing_columns_exits(self, tmp_path):
        source = tmp_path / "bad.csv"
        source.write_text("term,meaning\na,b\n", encoding="utf-8")
        with pytest.raises(SystemExit):
            cli.main(["--dicpath", str(tmp_path), "import", "bad", str(source)])

    def test_flags_reach_config(self, tmp_path):
        args = cli.build_parser().parse_args(
            ["--data-dir", str(tmp_path), "--intervals", "1,3,9", "--no-autosave", "list"]
        )
        cli.apply_args(args)
        assert DictermConfig.DATA_DIR == tmp_path
        assert DictermConfig.LEITNER_INTERVALS == [1, 3, 9]
        assert DictermConfig.AUTOSAVE is False

    def test_bad_interval_env_is_reported(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DICTERM_INTERVALS", "1,x")
        monkeypatch.setattr(DictermConfig, "LEITNER_INTERVALS", None)
        with pytest.raises(SystemExit) as exc:
            cli.main(["--dicpath", str(tmp_path), "--data-dir", str(tmp_path)])
        assert "invalid interval list" in str(exc.value)

import json

from tweetwall import cli


def test_config_command_prints_merged_json(tmp_path, monkeypatch, capsys):
    (tmp_path / "tweetwallConfig.json").write_text(
        json.dumps({"latestImage": {"count": 20}, "extra": [1, 2]}), encoding="utf-8"
    )
    monkeypatch.setenv("TWEETWALL_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("TWEETWALL_WORKDIR", str(tmp_path))
    monkeypatch.setattr(cli, "setup_logging", lambda settings: None)

    assert cli.main(["config"]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["extra"] == [1, 2]
    assert out["latestImage"]["count"] == 20
    assert out["latestImage"]["query"] == "JCreteCharity"


def test_broken_configuration_exits_non_zero(tmp_path, monkeypatch):
    (tmp_path / "tweetwallConfig.json").write_text("{", encoding="utf-8")
    monkeypatch.setenv("TWEETWALL_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("TWEETWALL_WORKDIR", str(tmp_path))
    monkeypatch.setattr(cli, "setup_logging", lambda settings: None)

    assert cli.main(["config"]) == 1

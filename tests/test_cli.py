from __future__ import annotations

import json

from holdem_sim.cli import main, resolve_range


class TestResolveRange:
    def test_tokens(self) -> None:
        assert resolve_range("AA,KK AKs") == ["AA", "KK", "AKs"]

    def test_preset(self) -> None:
        assert resolve_range("preset:premium") == ["AA", "KK", "QQ", "JJ", "TT"]

    def test_top_percent(self) -> None:
        assert resolve_range("top:2.4") == resolve_range("preset:premium")


class TestMain:
    def test_json_output(self, capsys) -> None:
        code = main(["--player", "AA", "--player", "KK", "--iterations", "500", "--seed", "3", "--json"])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["iterations"] == 500
        assert [p["player_id"] for p in data["players"]] == ["p1", "p2"]

    def test_text_output(self, capsys) -> None:
        code = main(["--player", "7h8h", "--player", "AKo,AKs", "--board", "AhKhQh2c5h",
                     "--iterations", "300", "--seed", "1"])
        assert code == 0
        out = capsys.readouterr().out
        assert "EQUITY RESULTS" in out
        assert "100.00%" in out

    def test_error_exit_code(self, capsys) -> None:
        code = main(["--player", "AK", "--player", "QQ"])
        assert code == 2
        assert "Invalid range token" in capsys.readouterr().err

    def test_insufficient_players(self, capsys) -> None:
        assert main(["--player", "AA"]) == 2
        assert "At least 2 players" in capsys.readouterr().err

    def test_unknown_preset(self, capsys) -> None:
        assert main(["--player", "preset:nope", "--player", "AA"]) == 2

    def test_ranking(self, capsys) -> None:
        assert main(["--ranking", "3"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[2].split()[1] == "AA"
        assert len(out) == 5

    def test_presets(self, capsys) -> None:
        assert main(["--presets"]) == 0
        assert "premium" in capsys.readouterr().out.split()

from __future__ import annotations

import random

import pytest

from holdem_sim.errors import InsufficientPlayers, InvalidBoard, InvalidIterations
from holdem_sim.simulator import (
    EquityCounts,
    Player,
    PlayerResult,
    SimulationConfig,
    Simulator,
    TieCredit,
    run_simulation,
)


class TestEquity:
    def test_aces_vs_kings_preflop(self) -> None:
        result = run_simulation({"A": ["AA"], "B": ["KK"]}, iterations=20000, seed=11)
        assert result.get("A").equity == pytest.approx(82, abs=3)
        assert result.get("B").equity == pytest.approx(18, abs=3)
        assert result.conflicts == 0

    def test_kings_flop_a_set(self) -> None:
        result = run_simulation({"A": ["AA"], "B": ["KK"]}, board="Kh7d2c", iterations=20000, seed=11)
        assert result.get("B").equity == pytest.approx(91.2, abs=1.5)

    def test_flush_on_complete_board_always_wins(self) -> None:
        result = run_simulation({"A": ["7h8h"], "B": ["AKo", "AKs"]}, board="AhKhQh2c5h",
                                iterations=5000, seed=5)
        a = result.get("A")
        assert result.evaluated > 0
        assert result.conflicts > 0
        assert a.wins == result.evaluated
        assert a.equity == 100.0
        assert result.get("B").equity == 0.0

    def test_equities_sum_to_hundred(self) -> None:
        result = run_simulation({"A": ["QQ", "AKs"], "B": ["JTs"], "C": ["22+"]},
                                iterations=5000, seed=2)
        assert sum(p.equity for p in result.players) == pytest.approx(100.0)

    def test_same_seed_same_result(self) -> None:
        ranges = {"A": ["AKs"], "B": ["QQ", "JJ"]}
        first = run_simulation(ranges, iterations=3000, seed=99)
        second = run_simulation(ranges, iterations=3000, seed=99)
        assert first.to_dict() == second.to_dict()


class TestValidation:
    def test_single_player(self) -> None:
        with pytest.raises(InsufficientPlayers, match="At least 2 players"):
            run_simulation({"A": ["AA"]}, iterations=100)

    def test_empty_ranges_do_not_count(self) -> None:
        with pytest.raises(InsufficientPlayers):
            run_simulation({"A": ["AA"], "B": [], "C": []}, iterations=100)

    def test_inactive_players_do_not_count(self) -> None:
        players = [Player.from_range("A", ["AA"]), Player.from_range("B", ["KK"], active=False)]
        with pytest.raises(InsufficientPlayers):
            Simulator().run(players, iterations=100)

    @pytest.mark.parametrize("board", ["Kh7d", "Kh7d2c3s4h5d", "KhKh2c"])
    def test_bad_board(self, board: str) -> None:
        with pytest.raises(InvalidBoard):
            run_simulation({"A": ["AA"], "B": ["KK"]}, board=board, iterations=100)

    @pytest.mark.parametrize("iterations", [0, -5, 2.5, True])
    def test_bad_iterations(self, iterations) -> None:
        with pytest.raises(InvalidIterations):
            run_simulation({"A": ["AA"], "B": ["KK"]}, iterations=iterations)

    def test_inactive_player_skipped_in_result(self) -> None:
        players = [
            Player.from_range("A", ["AA"]),
            Player.from_range("B", ["KK"]),
            Player.from_range("C", ["QQ"], active=False),
        ]
        result = Simulator(SimulationConfig(iterations=500, seed=1)).run(players)
        assert [p.player_id for p in result.players] == ["A", "B"]


class TestCounts:
    def test_split_credit(self) -> None:
        counts = EquityCounts.empty(3)
        counts.record([0, 1, 2], TieCredit.SPLIT)
        assert counts.tie_share == pytest.approx([1 / 3] * 3)
        assert counts.ties == [1, 1, 1]

    def test_half_credit(self) -> None:
        counts = EquityCounts.empty(3)
        counts.record([0, 2], TieCredit.HALF)
        counts.record([1], TieCredit.HALF)
        assert counts.tie_share == [0.5, 0.0, 0.5]
        assert counts.wins == [0, 1, 0]
        assert counts.evaluated == 2

    def test_conflict_is_attempted_not_evaluated(self) -> None:
        counts = EquityCounts.empty(2)
        counts.record_conflict()
        assert (counts.attempted, counts.evaluated, counts.conflicts) == (1, 0, 1)

    def test_merge(self) -> None:
        a, b = EquityCounts.empty(2), EquityCounts.empty(2)
        a.record([0], TieCredit.SPLIT)
        b.record([0, 1], TieCredit.SPLIT)
        b.record_conflict()
        merged = a.merge(b)
        assert merged.wins == [1, 0]
        assert merged.ties == [1, 1]
        assert merged.attempted == 3
        assert merged.evaluated == 2

    def test_merge_mismatch(self) -> None:
        with pytest.raises(ValueError):
            EquityCounts.empty(2).merge(EquityCounts.empty(3))

    def test_player_result_with_no_evaluations(self) -> None:
        result = PlayerResult(player_id="A", wins=0, ties=0, total=0)
        assert result.equity == 0.0
        assert result.win_pct == 0.0


class TestSimulator:
    def test_iter_run_reports_progress(self) -> None:
        sim = Simulator(SimulationConfig(seed=4, report_every=250))
        players = [Player.from_range("A", ["AA"]), Player.from_range("B", ["KK"])]
        snapshots = list(sim.iter_run(players, iterations=1000))
        assert [s.attempted for s in snapshots] == [250, 500, 750, 1000]

    def test_iter_run_validates_eagerly(self) -> None:
        with pytest.raises(InsufficientPlayers):
            Simulator().iter_run([Player.from_range("A", ["AA"])])

    def test_iter_run_can_stop_early(self) -> None:
        sim = Simulator(SimulationConfig(seed=4, report_every=100))
        players = [Player.from_range("A", ["AA"]), Player.from_range("B", ["KK"])]
        for counts in sim.iter_run(players, iterations=100000):
            break
        assert counts.attempted == 100

    def test_partitioned_runs_merge(self) -> None:
        sim = Simulator(SimulationConfig(iterations=2000))
        players = [Player.from_range("A", ["AA"]), Player.from_range("B", ["KK"])]
        parts = [sim.run_counts(players, rng=random.Random(seed)) for seed in (1, 2)]
        merged = parts[0].merge(parts[1])
        result = Simulator.build_result(players, merged)
        assert result.iterations == 4000
        assert result.get("A").equity == pytest.approx(82, abs=5)

    def test_half_credit_matches_split_heads_up(self) -> None:
        ranges = {"A": ["AKs"], "B": ["AKo"]}
        split = run_simulation(ranges, iterations=2000, config=SimulationConfig(seed=8))
        half = run_simulation(ranges, iterations=2000,
                              config=SimulationConfig(seed=8, tie_credit=TieCredit.HALF))
        assert split.get("A").equity == pytest.approx(half.get("A").equity)

    def test_kickers_change_tie_rate(self) -> None:
        ranges = {"A": ["AKo"], "B": ["AQo"]}
        loose = run_simulation(ranges, iterations=3000, seed=6)
        strict = run_simulation(ranges, iterations=3000,
                                config=SimulationConfig(seed=6, resolve_kickers=True))
        assert strict.get("A").tie_pct < loose.get("A").tie_pct

    def test_result_rendering(self) -> None:
        result = run_simulation({"hero": ["AA"], "villain": ["KK"]}, board="Kh7d2c",
                                iterations=200, seed=1)
        text = str(result)
        assert "EQUITY RESULTS" in text
        assert "Kh 7d 2c" in text
        data = result.to_dict()
        assert data["board"] == ["Kh", "7d", "2c"]
        assert [p["player_id"] for p in data["players"]] == ["hero", "villain"]

    def test_unnamed_players_report_their_id(self) -> None:
        players = [Player.from_range("A", ["AA"], name="Hero"), Player.from_range("B", ["KK"])]
        result = Simulator(SimulationConfig(iterations=200, seed=1)).run(players)
        assert [p.name for p in result.players] == ["Hero", "B"]
        assert str(result.players[1]).startswith("B ")

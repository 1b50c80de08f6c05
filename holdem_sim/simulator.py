"""
Main API for Hold'em equity simulation.
Provides clean interface for running Monte Carlo equity runs.
"""

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Iterator, Mapping, Optional, Sequence, Union

from .engine.deck import Card, format_cards, has_duplicates, parse_cards
from .engine.hand_evaluator import EvaluatorConfig, HandEvaluator
from .engine.range_parser import ExpandedHand, expand_range, split_range
from .engine.showdown import play_showdown
from .errors import InsufficientPlayers, InvalidBoard, InvalidIterations

logger = logging.getLogger(__name__)

VALID_BOARD_SIZES = (0, 3, 4, 5)


class TieCredit(Enum):
    SPLIT = "split"   # Each of k tied players gets 1/k of the pot
    HALF = "half"     # Every tie is worth half a win, however many players tie


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""
    iterations: int = 10000
    seed: Optional[int] = None
    tie_credit: TieCredit = TieCredit.SPLIT
    resolve_kickers: bool = False
    report_every: int = 5000  # iter_run yields progress this often


@dataclass
class Player:
    """A seat at the table and the concrete hands it may hold."""
    id: str
    hands: list[ExpandedHand]
    name: Optional[str] = None
    tokens: list[str] = field(default_factory=list)
    active: bool = True

    @classmethod
    def from_range(cls, id: str, tokens: Union[str, Sequence[str]],
                   name: str = None, active: bool = True) -> "Player":
        """Build a player from range tokens such as ``["AA", "AKs"]``."""
        hands = expand_range(tokens)
        token_list = split_range(tokens) if isinstance(tokens, str) else list(tokens)
        return cls(id=id, hands=hands, name=name, tokens=token_list, active=active)

    @property
    def display_name(self) -> str:
        return self.name or self.id


@dataclass
class PlayerResult:
    """Equity statistics for one player."""
    player_id: str
    wins: int
    ties: int
    total: int
    tie_share: float = 0.0
    name: Optional[str] = None

    @property
    def equity(self) -> float:
        """Pot share in percent: (wins + tie credit) / total * 100."""
        if self.total == 0:
            return 0.0
        return (self.wins + self.tie_share) / self.total * 100

    @property
    def win_pct(self) -> float:
        return self.wins / self.total * 100 if self.total else 0.0

    @property
    def tie_pct(self) -> float:
        return self.ties / self.total * 100 if self.total else 0.0

    @property
    def losses(self) -> int:
        return self.total - self.wins - self.ties

    def __str__(self):
        label = self.name or self.player_id
        return (f"{label:<12} equity {self.equity:6.2f}%  "
                f"win {self.win_pct:6.2f}%  tie {self.tie_pct:6.2f}%")

    def to_dict(self):
        return {
            "player_id": self.player_id,
            "name": self.name,
            "equity": self.equity,
            "wins": self.wins,
            "ties": self.ties,
            "losses": self.losses,
            "total": self.total,
        }


@dataclass
class EquityCounts:
    """Raw win/tie tallies; two runs merge by adding their counts."""
    wins: list[int]
    ties: list[int]
    tie_share: list[float]
    attempted: int = 0
    evaluated: int = 0
    conflicts: int = 0

    @classmethod
    def empty(cls, players: int) -> "EquityCounts":
        return cls(wins=[0] * players, ties=[0] * players, tie_share=[0.0] * players)

    def record(self, winners: Sequence[int], tie_credit: TieCredit) -> None:
        """Credit one evaluated hand."""
        self.attempted += 1
        self.evaluated += 1
        if len(winners) == 1:
            self.wins[winners[0]] += 1
            return
        share = 0.5 if tie_credit == TieCredit.HALF else 1.0 / len(winners)
        for i in winners:
            self.ties[i] += 1
            self.tie_share[i] += share

    def record_conflict(self) -> None:
        self.attempted += 1
        self.conflicts += 1

    def merge(self, other: "EquityCounts") -> "EquityCounts":
        """Sum two tallies over the same players."""
        if len(self.wins) != len(other.wins):
            raise ValueError("Cannot merge counts for different player lists")
        return EquityCounts(
            wins=[a + b for a, b in zip(self.wins, other.wins)],
            ties=[a + b for a, b in zip(self.ties, other.ties)],
            tie_share=[a + b for a, b in zip(self.tie_share, other.tie_share)],
            attempted=self.attempted + other.attempted,
            evaluated=self.evaluated + other.evaluated,
            conflicts=self.conflicts + other.conflicts,
        )

    def snapshot(self) -> "EquityCounts":
        return EquityCounts(list(self.wins), list(self.ties), list(self.tie_share),
                            self.attempted, self.evaluated, self.conflicts)


@dataclass
class SimulationResult:
    """Results from one simulation run."""
    players: list[PlayerResult]
    iterations: int
    evaluated: int
    conflicts: int
    board: list[Card] = field(default_factory=list)

    def get(self, player_id: str) -> Optional[PlayerResult]:
        return next((p for p in self.players if p.player_id == player_id), None)

    def __str__(self):
        board = format_cards(self.board) if self.board else "(none)"
        lines = [
            f"{'='*50}",
            f"  EQUITY RESULTS ({self.iterations:,} iterations)",
            f"  Board: {board}",
            f"  Evaluated: {self.evaluated:,}  Conflicts skipped: {self.conflicts:,}",
            f"{'='*50}",
        ]
        for p in self.players:
            bar = "█" * int(p.equity / 4)
            lines.append(f"  {p} {bar}")
        lines.append(f"{'='*50}")
        return "\n".join(lines)

    def to_dict(self):
        return {
            "iterations": self.iterations,
            "evaluated": self.evaluated,
            "conflicts": self.conflicts,
            "board": [str(c) for c in self.board],
            "players": [p.to_dict() for p in self.players],
        }


class Simulator:
    """
    Main simulator class.

    Usage:
        sim = Simulator(SimulationConfig(seed=7))
        result = sim.run_ranges({"hero": ["AA"], "villain": ["KK"]})
        print(result)

        # Or watch progress and stop early:
        for counts in sim.iter_run(players, iterations=1_000_000):
            if should_stop():
                break
    """

    def __init__(self, config: SimulationConfig = None):
        self.config = config or SimulationConfig()
        self.evaluator = HandEvaluator(EvaluatorConfig(resolve_kickers=self.config.resolve_kickers))

    def _make_rng(self, rng: Optional[random.Random]) -> random.Random:
        return rng if rng is not None else random.Random(self.config.seed)

    def prepare(self, players: Iterable[Player], board: Union[str, Sequence] = (),
                iterations: int = None) -> tuple[list[Player], list[Card], int]:
        """
        Validate inputs before any cards are dealt.

        Returns:
            (seated players, parsed board, iteration count)
        """
        seated = [p for p in players if p.active and p.hands]
        if len(seated) < 2:
            raise InsufficientPlayers("At least 2 players with ranges are required for simulation")

        fixed_board = parse_cards(board)
        if len(fixed_board) not in VALID_BOARD_SIZES:
            raise InvalidBoard(f"Board must have 0, 3, 4 or 5 cards, got {len(fixed_board)}")
        if has_duplicates(fixed_board):
            raise InvalidBoard(f"Board repeats a card: {format_cards(fixed_board)}")

        if iterations is None:
            iterations = self.config.iterations
        if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations <= 0:
            raise InvalidIterations(f"Iterations must be a positive integer, got {iterations!r}")

        return seated, fixed_board, iterations

    def iter_run(self, players: Iterable[Player], board: Union[str, Sequence] = (),
                 iterations: int = None, rng: random.Random = None) -> Iterator[EquityCounts]:
        """
        Run a simulation step by step.

        Inputs are validated immediately; the returned iterator yields a
        snapshot of the running counts every ``report_every`` attempts and
        once at the end. Stop iterating to interrupt the run.
        """
        seated, fixed_board, iterations = self.prepare(players, board, iterations)
        logger.debug("Simulating %d players, board=%s, iterations=%d, pools=%s",
                     len(seated), format_cards(fixed_board) or "-", iterations,
                     [len(p.hands) for p in seated])
        return self._iterate(seated, fixed_board, iterations, self._make_rng(rng))

    def _iterate(self, seated: list[Player], fixed_board: list[Card], iterations: int,
                 rng: random.Random) -> Iterator[EquityCounts]:
        pools = [p.hands for p in seated]
        counts = EquityCounts.empty(len(seated))
        report_every = self.config.report_every or iterations
        tie_credit = self.config.tie_credit

        for attempt in range(1, iterations + 1):
            # Uniform over combinations, not over range tokens
            hole_cards = [rng.choice(pool) for pool in pools]
            showdown = play_showdown(hole_cards, fixed_board, self.evaluator, rng)
            if showdown is None:
                counts.record_conflict()
            else:
                counts.record(showdown.winners, tie_credit)

            if attempt % report_every == 0 or attempt == iterations:
                yield counts.snapshot()

    def run_counts(self, players: Iterable[Player], board: Union[str, Sequence] = (),
                   iterations: int = None, rng: random.Random = None) -> EquityCounts:
        """Run to completion and return the raw tallies."""
        counts = None
        for counts in self.iter_run(players, board, iterations, rng):
            pass
        return counts

    def run(self, players: Iterable[Player], board: Union[str, Sequence] = (),
            iterations: int = None, rng: random.Random = None) -> SimulationResult:
        """
        Run a full simulation.

        Args:
            players: Players with expanded hand pools
            board: 0, 3, 4 or 5 fixed board cards
            iterations: Attempts to make (defaults to config.iterations)
            rng: Random source (defaults to one seeded from config.seed)

        Returns:
            SimulationResult with one PlayerResult per seated player
        """
        players = list(players)
        seated, fixed_board, iterations = self.prepare(players, board, iterations)
        counts = self.run_counts(seated, fixed_board, iterations, rng)
        result = self.build_result(seated, counts, fixed_board)
        logger.info("Simulation finished: %d attempted, %d evaluated, %d conflicts",
                    counts.attempted, counts.evaluated, counts.conflicts)
        return result

    def run_ranges(self, ranges: Mapping[str, Union[str, Sequence[str]]],
                   board: Union[str, Sequence] = (), iterations: int = None,
                   rng: random.Random = None) -> SimulationResult:
        """Expand {player_id: tokens} and run a simulation."""
        players = [Player.from_range(pid, tokens) for pid, tokens in ranges.items()]
        return self.run(players, board, iterations, rng)

    @staticmethod
    def build_result(seated: Sequence[Player], counts: EquityCounts,
                     board: Sequence[Card] = ()) -> SimulationResult:
        """Turn raw tallies into per-player results."""
        return SimulationResult(
            players=[
                PlayerResult(
                    player_id=p.id,
                    name=p.display_name,
                    wins=counts.wins[i],
                    ties=counts.ties[i],
                    total=counts.evaluated,
                    tie_share=counts.tie_share[i],
                )
                for i, p in enumerate(seated)
            ],
            iterations=counts.attempted,
            evaluated=counts.evaluated,
            conflicts=counts.conflicts,
            board=list(board),
        )


# Convenience function
def run_simulation(players: Union[Sequence[Player], Mapping[str, Sequence[str]]],
                   board: Union[str, Sequence] = None, iterations: int = None,
                   seed: int = None, config: SimulationConfig = None) -> SimulationResult:
    """Quick run with a default simulator. Iterations default to config.iterations."""
    if config is None:
        config = SimulationConfig(seed=seed)
    elif seed is not None:
        config = replace(config, seed=seed)
    sim = Simulator(config)
    if isinstance(players, Mapping):
        return sim.run_ranges(players, board or (), iterations)
    return sim.run(players, board or (), iterations)

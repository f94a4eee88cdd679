# ruff: noqa: E402
from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mazechase import MazeConfig, MazeGame, PlannerKind, PursuerTeam, RandomWalkEvader
from mazechase.planners import QLearningPlanner, QTable
from mazechase.settings import Settings


def run_match(game: MazeGame, team: PursuerTeam, evader: RandomWalkEvader, max_ticks: int, budget_s: float) -> dict:
    game.reset()
    team.new_match()

    ticks = 0
    captures = 0
    while not game.is_terminal() and ticks < max_ticks:
        deadline = time.monotonic() + budget_s
        pursuer_moves = team.get_moves(game, deadline=deadline)
        game.advance(evader.get_move(game), pursuer_moves)
        captures += int(game.was_captured())
        ticks += 1

    s = game.state
    return {"ticks": ticks, "captures": captures, "lives": s.lives, "level": s.level, "score": s.score}


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--matches", type=int, default=1)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument(
        "--planner", type=str, default=None, choices=["mcts", "qlearning"], help="Overrides MAZECHASE_PLANNER"
    )
    parser.add_argument("--tick-threshold", type=int, default=None, help="Overrides MAZECHASE_TICK_THRESHOLD")
    parser.add_argument("--sensor-range", type=int, default=8, help="Pursuer sight range (path distance)")
    parser.add_argument("--max-ticks", type=int, default=2000)
    parser.add_argument("--budget-ms", type=float, default=40.0, help="Per-tick decision budget")
    parser.add_argument("--qtable", type=str, default=None, help="Load/save Q-tables under this directory")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = Settings().to_agent_config()
    planner = PlannerKind[args.planner.upper()] if args.planner else None

    game = MazeGame(config=MazeConfig(sensor_range=args.sensor_range))
    team = PursuerTeam(planner=planner, tick_threshold=args.tick_threshold, config=config, seed=args.seed)
    evader = RandomWalkEvader()

    qdir = Path(args.qtable) if args.qtable else None
    if qdir is not None:
        qdir.mkdir(parents=True, exist_ok=True)
        for pid, agent in team.agents.items():
            if isinstance(agent.planner, QLearningPlanner):
                agent.planner.table = QTable.load(qdir / f"{pid}.json")

    for i in range(args.matches):
        result = run_match(game, team, evader, args.max_ticks, args.budget_ms / 1000.0)
        print(f"match {i}: {result}")

    for pid, agent in team.agents.items():
        if not isinstance(agent.planner, QLearningPlanner):
            continue
        agent.planner.log_table()
        if qdir is not None:
            agent.planner.table.save(qdir / f"{pid}.json")


if __name__ == "__main__":
    main()

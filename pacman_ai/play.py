#!/usr/bin/env python3
"""
Play Pac-Man games with one of the decision controllers.

Runs against the HTTP game server by default, or a headless local game with
--local. Ghost moves seen along the way feed the learned ghost model, which
is saved between runs.

Usage:
    python -m pacman_ai.play --algorithm expectimax --games 20 --local
"""

import argparse
import json
from typing import Optional

from tqdm import tqdm

from .config import DECIDE_EVERY, DEFAULT_DEPTH, MAX_STEPS, MODEL_FILE, SERVER_URL
from .controllers import ALGORITHMS, ALIASES, PacmanController
from .ghost_model import GhostModel, PickleModelStore, observe_ghost_moves
from .grid import Direction, to_cell
from .pacman_env import PacmanEnv
from .simulate import GHOST_AIS, LocalGame


def play_game(env, controller: PacmanController, algorithm: str,
              depth: Optional[int] = None, max_steps: int = MAX_STEPS,
              decide_every: int = DECIDE_EVERY) -> Optional[dict]:
    """
    Play one game to the end and return its summary, or None if the game
    could not be started.
    """
    snapshot = env.reset()
    if snapshot is None:
        return None
    controller.new_game()

    initial_dots = snapshot.status.get('dots_remaining', 0)
    last_move = Direction.NONE
    prev_ghosts = None
    steps = 0

    while steps < max_steps:
        pacman = to_cell(snapshot.pacman)
        ghost_cells = [to_cell(g) for g in snapshot.ghosts]

        # Learn from what the ghosts just did
        if prev_ghosts is not None and len(prev_ghosts) == len(ghost_cells):
            observe_ghost_moves(controller.ghost_model, prev_ghosts, ghost_cells, pacman,
                                snapshot.maze)
        prev_ghosts = ghost_cells

        # Decide every few ticks, or right away when stopped
        if snapshot.pacman_dir == Direction.NONE or steps % decide_every == 0:
            move = controller.decide(algorithm, snapshot.maze, snapshot.pacman,
                                     snapshot.ghosts, snapshot.ghost_states,
                                     depth=depth, last_move=last_move)
            if move != Direction.NONE:
                last_move = move

        snapshot = env.step(last_move)
        steps += 1
        if snapshot is None or snapshot.finished or not snapshot.alive:
            break

    status = snapshot.status if snapshot is not None else {}
    summary = {
        'score': status.get('score', 0),
        'dots_eaten': initial_dots - status.get('dots_remaining', initial_dots),
        'steps': steps,
        'won': bool(status.get('round_won', False)),
        'ghosts_eaten': status.get('ghosts_eaten', 0),
    }
    summary.update(controller.stats_report())
    return summary


def run(algorithm: str = 'expectimax', games: int = 10, depth: int = DEFAULT_DEPTH,
        local: bool = False, ghost_ai: str = 'classic', url: str = SERVER_URL,
        model_file: str = MODEL_FILE, forget: bool = False,
        max_steps: int = MAX_STEPS, summary_file: Optional[str] = 'games.json'):
    print(f"\n{'='*60}")
    print(f"PAC-MAN AI: {algorithm.upper()} (depth {depth})")
    print(f"{'='*60}")

    model = GhostModel.load(PickleModelStore(model_file))
    controller = PacmanController(ghost_model=model, default_depth=depth)
    if forget:
        controller.full_reset()

    env = LocalGame(ghost_ai=ghost_ai) if local else PacmanEnv(url=url)

    results = []
    try:
        for game in tqdm(range(1, games + 1), desc=algorithm, unit="game"):
            summary = play_game(env, controller, algorithm, depth=depth, max_steps=max_steps)
            if summary is None:
                tqdm.write("[ERROR] Could not start game, stopping")
                break
            results.append(summary)
            tqdm.write(f"Game {game:3d}: Score={summary['score']:5d} Dots={summary['dots_eaten']:3d} "
                       f"Steps={summary['steps']:5d} Avg={summary['avg_decision_time_ms']:.2f}ms "
                       f"Nodes={summary['nodes_evaluated']} Conf={summary['confidence']}%"
                       f"{' WIN' if summary['won'] else ''}")
    except KeyboardInterrupt:
        print("\n[INTERRUPTED]")

    model.save()

    if results:
        n = len(results)
        print(f"\n{'='*60}")
        print(f"Games:         {n}")
        print(f"Avg Score:     {sum(r['score'] for r in results) / n:.1f}")
        print(f"Avg Dots:      {sum(r['dots_eaten'] for r in results) / n:.1f}")
        print(f"Wins:          {sum(r['won'] for r in results)} / {n}")
        print(f"Observations:  {model.total} (confidence {model.confidence()}%)")
        print(f"{'='*60}")

    if summary_file:
        with open(summary_file, 'w') as f:
            json.dump({'algorithm': algorithm, 'depth': depth, 'games': results}, f, indent=2)

    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play Pac-Man with a search controller")
    parser.add_argument("--algorithm", default="expectimax",
                        choices=ALGORITHMS + tuple(ALIASES),
                        help="Decision algorithm for Pac-Man")
    parser.add_argument("--games", type=int, default=10,
                        help="Number of games to play")
    parser.add_argument("--depth", type=int, default=DEFAULT_DEPTH,
                        help="Lookahead for minimax/expectimax")
    parser.add_argument("--local", action="store_true",
                        help="Use the headless local game instead of the server")
    parser.add_argument("--ghost-ai", default="classic", choices=GHOST_AIS,
                        help="Ghost controller for --local games")
    parser.add_argument("--port", type=int, default=None,
                        help="Port for the Pacman API server on localhost")
    parser.add_argument("--model", default=MODEL_FILE,
                        help="Ghost model file")
    parser.add_argument("--forget", action="store_true",
                        help="Start from an empty ghost model")
    parser.add_argument("--max-steps", type=int, default=MAX_STEPS,
                        help="Tick limit per game")
    parser.add_argument("--summary", default="games.json",
                        help="Where to write the JSON summary")
    args = parser.parse_args(argv)

    url = f"http://127.0.0.1:{args.port}" if args.port else SERVER_URL
    run(
        algorithm=args.algorithm,
        games=args.games,
        depth=args.depth,
        local=args.local,
        ghost_ai=args.ghost_ai,
        url=url,
        model_file=args.model,
        forget=args.forget,
        max_steps=args.max_steps,
        summary_file=args.summary,
    )


if __name__ == "__main__":
    main()

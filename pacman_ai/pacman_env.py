"""
Client for a Pac-Man game server.

The server owns the game loop; this client reads a snapshot per tick and
sends back the chosen direction. Endpoints:

    POST /api/restart, POST /api/start   new game
    GET  /api/state                      current snapshot
    POST /api/step {"direction": ...}    advance one tick, returns snapshot

Snapshot JSON:
    map:    rows of tile codes (config.TILES)
    pacman: {x, y, direction, alive}            pixel coordinates
    ghosts: [{x, y, edible, dangerous}, ...]
    status: {score, lives, dots_remaining, round_won, game_over}
"""

from dataclasses import dataclass, field
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import REQUEST_TIMEOUT, SERVER_URL, TUNNEL_ROW
from .grid import Direction, Position, ThreatState
from .maze import Maze


@dataclass
class GameSnapshot:
    maze: Maze
    pacman: Position
    pacman_dir: Direction
    ghosts: List[Position]
    ghost_states: List[ThreatState]
    status: dict = field(default_factory=dict)

    @property
    def alive(self) -> bool:
        return not self.status.get('just_died', False)

    @property
    def finished(self) -> bool:
        return bool(self.status.get('round_won') or self.status.get('game_over'))


def parse_state(state: dict) -> GameSnapshot:
    """Turn server JSON into a snapshot. Raises KeyError/ValueError on malformed input."""
    rows = state['map']
    tunnel_row = state.get('tunnel_row', TUNNEL_ROW)
    if tunnel_row is not None and tunnel_row >= len(rows):
        tunnel_row = None
    maze = Maze(rows, tunnel_row=tunnel_row)

    pacman = state['pacman']
    ghosts = state.get('ghosts', [])
    status = dict(state.get('status', {}))
    if not pacman.get('alive', True):
        status['just_died'] = True

    return GameSnapshot(
        maze=maze,
        pacman=(pacman['x'], pacman['y']),
        pacman_dir=Direction(pacman.get('direction', 'none')),
        ghosts=[(g['x'], g['y']) for g in ghosts],
        ghost_states=[ThreatState(is_edible=bool(g.get('edible', False)),
                                  is_dangerous=bool(g.get('dangerous', True)))
                      for g in ghosts],
        status=status,
    )


class PacmanEnv:
    """Thin HTTP wrapper around the game server."""

    def __init__(self, url: str = SERVER_URL, session: Optional[requests.Session] = None,
                 timeout: float = REQUEST_TIMEOUT):
        self.base_url = url.rstrip('/')
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            retry = Retry(total=3, backoff_factor=0.1)
            session.mount("http://", HTTPAdapter(max_retries=retry))
        self.session = session

    def reset(self) -> Optional[GameSnapshot]:
        try:
            self.session.post(f"{self.base_url}/api/restart", timeout=self.timeout)
            self.session.post(f"{self.base_url}/api/start", timeout=self.timeout)
        except requests.RequestException as e:
            print(f"[ERROR] Reset: {e}")
            return None
        return self.get_state()

    def get_state(self) -> Optional[GameSnapshot]:
        try:
            resp = self.session.get(f"{self.base_url}/api/state", timeout=self.timeout)
            resp.raise_for_status()
            return parse_state(resp.json())
        except (requests.RequestException, KeyError, ValueError) as e:
            print(f"[ERROR] State: {e}")
            return None

    def step(self, direction: Direction) -> Optional[GameSnapshot]:
        try:
            resp = self.session.post(
                f"{self.base_url}/api/step",
                json={"direction": direction.value},
                timeout=self.timeout
            )
            resp.raise_for_status()
            return parse_state(resp.json())
        except (requests.RequestException, KeyError, ValueError) as e:
            print(f"[ERROR] Step: {e}")
            return None

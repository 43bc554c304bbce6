# Grid geometry
GRID_PITCH = 10       # Pixels per maze cell
MAP_WIDTH = 19        # Classic maze width in cells
TUNNEL_ROW = 10       # Row whose two boundary columns wrap around

# Tile codes used by the maze grid and the game server map
TILES = {
    'wall': 0,
    'biscuit': 1,     # Plain pellet
    'empty': 2,       # Floor with nothing on it
    'block': 3,       # Ghost-house door (not walkable)
    'pill': 4,        # Power pellet
}

# Search settings
DEFAULT_DEPTH = 4           # Lookahead used when the caller passes no depth
ASTAR_MAX_NODES = 500       # Hard expansion cap per A* call
PROB_PRUNE = 0.01           # Expectimax skips ghost moves less likely than this

# Ghost model
SMOOTHING = 1               # Laplace pseudo-count per direction
SAVE_EVERY = 10             # Flush the model to the store every N observations
MODEL_FILE = "ghost_model.pkl"
SITUATION = {
    'axis_slack': 2,        # |dx| or |dy| at most this counts as aligned
    'near': 5,              # Manhattan distance below this is "near"
    'mid': 10,              # ... below this is "mid", otherwise "far"
}

# Anti-oscillation
HISTORY_LENGTH = 16
PENALTY = {
    'reverse': 50,          # Immediate reversal of the last move
    'revisit': 50,          # Base cost per recent-history hit
    'visit_scale': 30,      # Multiplier on (visits - free_visits)^2
    'free_visits': 2,       # Visits tolerated before the quadratic term kicks in
}

# Static evaluator - exact values, tuned by hand
EVAL = {
    # === Dangerous ghosts ===
    'capture_dist': 2,          # d < 2 is a near-certain death
    'capture': -2000,
    'danger_dist': 4,           # 2 <= d < 4
    'danger_scale': -500,       # divided by d
    'aware_dist': 8,            # 4 <= d < 8
    'aware_scale': -50,         # divided by d

    # === Edible ghosts ===
    'eat_ghost': 1000,          # d == 0
    'chase_dist': 5,            # 0 < d < 5
    'chase_scale': 400,
    'pursue_dist': 10,          # 5 <= d < 10
    'pursue_scale': 100,

    # === Pellets ===
    'pellet': 50,
    'pill': 150,
    'pill_under_threat': 500,
    'pill_threat_dist': 10,     # Nearest dangerous ghost closer than this
    'safe_dist': 8,             # Seek pellets when danger is farther than this
    'seek_base': 30,            # seek_base - distance to nearest pellet
}

# A* controller goal policy and danger costs
ASTAR_PANIC_DIST = 8        # Dangerous ghost closer than this -> go for a pill
DANGER_COST = (
    (2, 50),                # (distance below, extra step cost)
    (4, 20),
    (6, 5),
)

# Classic ghost personalities
PINKY_LOOKAHEAD = 4         # Cells ahead of Pac-Man
CLYDE_SHY_DIST = 8          # Clyde scatters when closer than this
CLYDE_CORNER = (0, 21)
GHOST_DEPTH = 3

# Game server driver
SERVER_URL = "http://127.0.0.1:8080"
REQUEST_TIMEOUT = 5
DECIDE_EVERY = 3            # Ticks between decisions while Pac-Man is moving
MAX_STEPS = 10000

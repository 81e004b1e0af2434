"""
Default parameters for the raffle draw.

These values define how a draw looks and feels to the audience.
They can be overridden per run through the environment (see config.py).
"""

# Suspense ticks shown before the reveal
TICK_COUNT = 20

# Seconds between two suspense ticks
TICK_INTERVAL_S = 0.1

# Extra pause between the last tick and the reveal
REVEAL_DELAY_S = 0.5

# How long the celebration stays up after a reveal
CELEBRATION_S = 3.0

# Display truncation only; history storage is unbounded
HISTORY_DISPLAY_LIMIT = 10
PREVIEW_DISPLAY_LIMIT = 10

# Id prefixes for manually added and imported participants
MANUAL_ID_PREFIX = "p"
IMPORT_ID_PREFIX = "batch"

WIDTH = 800
HEIGHT = 450
FULLSCREEN = False
RESIZABLE = True
FPS = 60
VSYNC = True
CAPTION = "Walkabout"
RANDOM_SEED = 14

# Scene geometry, as proportions of the current viewport
GROUND_Y_RATIO = 0.81
TARGET_X_RATIO = 0.75
ITEM_X_RATIO = 0.375

# Protagonist walk
PROTAGONIST_START_X = 50.0
PROTAGONIST_SPEED = 1.2  # px per tick
ARRIVAL_THRESHOLD = 60.0  # stops this far short of the companion
PICKUP_RADIUS = 30.0
PROTAGONIST_FRAME_MS = 150
PROTAGONIST_FRAME_COUNT = 4

# Companion idle cycle and celebratory bob
COMPANION_FRAME_MS = 200
COMPANION_FRAME_COUNT = 7
BOB_AMPLITUDE = 30.0
BOB_PERIOD_MS = 150.0

# Milestone
MILESTONE_DELAY_MS = 500
MILESTONE_TITLE = "Happy Valentine's Day!"
MILESTONE_MESSAGE = "You are my favorite adventure!"

# Hearts
PARTICLE_SPAWN_PROBABILITY = 0.05
PARTICLE_OFFSET_X = 40.0  # centre of the companion sprite
PARTICLE_JITTER_X = 20.0
PARTICLE_SPEED_MIN = 1.0
PARTICLE_SPEED_MAX = 2.0
PARTICLE_LIFE_DECREMENT = 0.01
PARTICLE_GLYPH = "♥"
PARTICLE_COLOR = (233, 30, 99)
PARTICLE_FONT_SIZE = 28

# Sprite sizes (px)
CHARACTER_SIZE = 80
ITEM_SIZE = 40
HELD_ITEM_SIZE = 25
CHARACTER_Y_OFFSET = -10.0
ITEM_Y_OFFSET = 10.0
HELD_ITEM_OFFSET = (45.0, 35.0)
GROUND_TOP_OFFSET = 40.0

# Asset gate
ASSET_TIMEOUT_MS = 2000
ASSET_LOAD_WORKERS = 4

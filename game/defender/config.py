"""Constants that govern sizes, pacing and difficulty for Wave Defender."""

# Canvas
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
WORLD_WIDTH = 800  # enemies bounce against this, not the live canvas width

# Session
STARTING_LIVES = 3
MAX_LIVES = 5
WAVE_BONUS_PER_WAVE = 100

# Player
PLAYER_WIDTH = 40
PLAYER_HEIGHT = 30
PLAYER_SPEED = 5.0
PLAYER_Y_OFFSET = 60  # distance from the bottom edge
SHOOT_DELAY_MS = 200.0
RAPID_SHOOT_DELAY_MS = 100.0

# Bullets
BULLET_WIDTH = 4
BULLET_HEIGHT = 10
BULLET_SPEED = -8.0
ENEMY_BULLET_WIDTH = 4
ENEMY_BULLET_HEIGHT = 8
ENEMY_BULLET_SPEED = 3.0

# Enemies
ENEMY_VARIANTS = {
    "basic": {"width": 40, "height": 30, "speed": 1.0, "points": 10, "color": (255, 136, 0)},
    "fast": {"width": 30, "height": 25, "speed": 2.0, "points": 20, "color": (255, 68, 68)},
}
BASIC_ENEMY_CHANCE = 0.7
ENEMY_DRIFT = 0.5
ENEMY_SPAWN_Y = -40
ENEMY_SPAWN_MARGIN = 40
ENEMY_DESPAWN_MARGIN = 50
ENEMY_FIRE_CHANCE = 0.001
ENEMY_FIRE_WAVE_SCALE = 0.2

# Waves
ENEMIES_PER_WAVE = 5
ENEMIES_PER_WAVE_STEP = 2
SPAWN_DELAY_MS = 2000.0
SPAWN_DELAY_STEP_MS = 100.0
MIN_SPAWN_DELAY_MS = 500.0

# Obstacles
OBSTACLE_WIDTH = 60
OBSTACLE_HEIGHT = 40
OBSTACLE_MAX_HEALTH = 3
OBSTACLE_BASE_COUNT = 3
OBSTACLE_X_MARGIN = 30
OBSTACLE_TOP = 100

# Power-ups
POWER_UP_SIZE = 20
POWER_UP_SPEED = 2.0
POWER_UP_DROP_CHANCE = 0.1
POWER_UP_KINDS = ("health", "rapid_fire", "shield")
POWER_UP_COLORS = {
    "health": (0, 255, 0),
    "rapid_fire": (255, 255, 0),
    "shield": (0, 255, 255),
}
RAPID_FIRE_DURATION_MS = 5000.0
SHIELD_DURATION_MS = 8000.0

# Particles
EXPLOSION_PARTICLES = 15
SPARK_PARTICLES = 8
PARTICLE_SHRINK = 0.98
PARTICLE_DECAY_RANGE = (0.01, 0.03)

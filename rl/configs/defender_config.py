"""
Training configuration for the Wave Defender environment
Reward shaping variants and algorithm hyperparameters
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # rendering is far too slow with parallel envs
    "width": 800,
    "height": 600,
    "frame_ms": 1000 / 60,
    "max_steps": 10_800,  # 3 minutes at 60 FPS
    "k_enemies": 5,
    "m_enemy_bullets": 5,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Baseline: score driven, moderate penalty for losing lives
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Score-driven reward with moderate life-loss penalty",
    "R_SCORE": 0.01,     # Per score point (kills + wave bonuses)
    "R_KILL": 0.5,       # Per enemy destroyed
    "R_LIFE_LOST": 2.0,  # Per life lost
    "R_POWER_UP": 0.5,   # Per power-up collected
    "R_WAVE": 1.0,       # Per wave cleared
    "R_SHOT": 0.005,     # Per bullet fired
    "R_TIME": 0.001,     # Per frame
    "R_DEATH": 5.0,      # On game over
}

# Survival: dodge first, shoot second
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Heavier life-loss and death penalties, lighter combat rewards",
    "R_SCORE": 0.005,
    "R_KILL": 0.2,
    "R_LIFE_LOST": 5.0,
    "R_POWER_UP": 1.0,
    "R_WAVE": 1.0,
    "R_SHOT": 0.01,
    "R_TIME": 0.0,
    "R_DEATH": 10.0,
}

# Aggressive: clear waves fast, accept hits
REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "Higher kill and wave rewards, lower penalties",
    "R_SCORE": 0.02,
    "R_KILL": 1.0,
    "R_LIFE_LOST": 1.0,
    "R_POWER_UP": 0.5,
    "R_WAVE": 3.0,
    "R_SHOT": 0.001,
    "R_TIME": 0.002,
    "R_DEATH": 3.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "aggressive": REWARD_CONFIG_AGGRESSIVE,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 1_000_000,
    "save_freq": 50_000,
    "eval_freq": 20_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}

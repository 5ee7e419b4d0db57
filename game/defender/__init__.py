"""Wave Defender - wave-based arcade shooter simulation"""

from .engine import DefenderGame, Intent, EntityView
from .session import GameState, Session
from .defender_env import DefenderEnv, run_random_episode

__all__ = ['DefenderGame', 'Intent', 'EntityView', 'GameState', 'Session', 'DefenderEnv', 'run_random_episode']

"""
play-release-resumer - resume halted Google Play staged rollouts
"""

__version__ = "0.1.0"

from .core import ReleaseResumer
from .errors import ResumerError

__all__ = ["ReleaseResumer", "ResumerError"]

"""
linkprune - deep link registry generation and dependency tree shaking for
Ionic/Angular builds.
"""

from .__version__ import __version__

__all__ = ["__version__"]

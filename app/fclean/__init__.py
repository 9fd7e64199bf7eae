"""fclean - Recursively clean Flutter projects.

Discovers Flutter projects (directories holding both ``pubspec.yaml``
and ``lib/``) under a root directory and runs ``flutter clean`` in each.
"""

__version__ = "0.1.0"

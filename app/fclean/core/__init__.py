"""Core orchestration, configuration and notification for fclean."""

from src.app.landing import LandingPage, UnknownCommandError, get_registered_commands

__all__ = ["LandingPage", "UnknownCommandError", "get_registered_commands"]

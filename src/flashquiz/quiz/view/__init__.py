from .app import FlashQuizApp

__all__ = ["FlashQuizApp"]

"""liftlog: a personal weight-training log."""

__version__ = "0.1.0"

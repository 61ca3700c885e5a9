"""Base logger for loggers to implement.

This module provides the base logger class for loggers to implement, a logger that
writes to the shared rich console, and a no-op logger that discards everything for
testing purposes.
"""

from abc import ABC, abstractmethod
from typing import Any

from nearest.utils.logging.console import console


class BaseLogger(ABC):
    """Base logger class."""

    def __init__(self):
        """Initializes the logger."""
        self.console = console

    @abstractmethod
    def log(self, *objects: Any):
        """Log any objects.

        Args:
            objects: Any objects to log
        """
        pass

    @abstractmethod
    def log_metrics(self, metrics: dict, step: int):
        """Logs the metrics.

        Args:
            metrics: The metrics to log
            step: The step number
        """
        pass


class ConsoleLogger(BaseLogger):
    """A logger that writes to the console."""

    def log(self, *objects: Any):
        """Logs the messages to the console.

        Args:
            objects: The objects to log
        """
        self.console.log(*objects)

    def log_metrics(self, metrics: dict, step: int):
        """Logs the metrics to the console.

        Args:
            metrics: The metrics to log
            step: The step number
        """
        formatted = ", ".join(f"{name}: {value}" for name, value in metrics.items())
        self.console.log(f"step {step} | {formatted}")


class NoOpLogger(BaseLogger):
    """A logger that does nothing."""

    def log(self, *objects: Any):
        """Discards the messages."""
        pass

    def log_metrics(self, metrics: dict, step: int):
        """Discards the metrics."""
        pass

"""Common logging utilities."""

from nearest.utils.logging.base import BaseLogger as BaseLogger
from nearest.utils.logging.base import ConsoleLogger as ConsoleLogger
from nearest.utils.logging.base import NoOpLogger
from nearest.utils.logging.console import console as console

no_op_logger = NoOpLogger()

"""Bootstrap settings."""
from dataclasses import dataclass
from typing import Optional

from ficcore.errors import InvalidArgumentError


@dataclass
class BootstrapConfig:
    """
    Knobs of the iterative bootstrap.

    Attributes:
        accuracy: Tolerance on each node value and on the change between
            global passes
        max_iterations: Cap on global passes; the traits default when None
        global_pass: Force (True) or forbid (False) repeated passes; by
            default only global interpolators repeat
        verbose: Log every solved node at INFO level
    """

    accuracy: float = 1.0e-12
    max_iterations: Optional[int] = None
    global_pass: Optional[bool] = None
    verbose: bool = False

    def __post_init__(self):
        if not self.accuracy > 0.0:
            raise InvalidArgumentError(f"accuracy must be positive, got {self.accuracy}")
        if self.max_iterations is not None and self.max_iterations < 1:
            raise InvalidArgumentError(
                f"max_iterations must be at least 1, got {self.max_iterations}"
            )

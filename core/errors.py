"""
core/errors.py -- Exception taxonomy for the export checker.

Two failure kinds exist and nothing else:

  UnitLoadError           -- a unit could not be located or raised while
                             importing. Caught at the probe boundary and
                             downgraded to a result plus one log line.
  MandatoryUnitEmptyError -- the core unit loaded but exports nothing.
                             Fatal: the run stops and exits with status 1.
"""


class CheckError(Exception):
    """Base exception for all checker errors."""

    def __init__(self, message: str, reference: str = "") -> None:
        self.message = message
        self.reference = reference
        super().__init__(self.message)


class UnitLoadError(CheckError):
    """Raised when a unit cannot be imported."""

    def __init__(self, reference: str, reason: str) -> None:
        self.reason = reason
        super().__init__(reason, reference=reference)


class MandatoryUnitEmptyError(CheckError):
    """Raised when the mandatory unit loads but exports no names."""

    def __init__(self, reference: str) -> None:
        super().__init__("Module does not export anything!", reference=reference)

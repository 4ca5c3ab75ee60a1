class CalibrationError(Exception):
    """Base class for every failure the session reports and recovers from."""


class MalformedInputError(CalibrationError):
    """Keyboard input could not be parsed before the retry limit ran out."""


class DegenerateInputError(CalibrationError):
    """All raw readings are effectively identical, so no line can be fitted."""

    def __init__(self, denominator: float):
        super().__init__("All raw readings are identical. Cannot compute calibration.")
        self.denominator = denominator


class NotCalibratedError(CalibrationError):
    def __init__(self, message: str = "No calibration loaded."):
        super().__init__(message)


class NoCalibrationError(NotCalibratedError):
    def __init__(self, message: str = "No calibration to save."):
        super().__init__(message)


class FileOpenError(CalibrationError):
    def __init__(self, filename, reason: str = ""):
        message = f"Cannot open file '{filename}'"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.filename = str(filename)
        self.reason = reason


class FileWriteError(CalibrationError):
    def __init__(self, filename, reason: str = ""):
        message = f"Cannot create file '{filename}'"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.filename = str(filename)
        self.reason = reason


class ParseError(CalibrationError):
    """A coefficient is missing or not numeric in a calibration file."""

    def __init__(self, field: str, filename=None):
        message = f"Cannot read {field} from file"
        if filename is not None:
            message += f" '{filename}'"
        super().__init__(message + ".")
        self.field = field
        self.filename = None if filename is None else str(filename)

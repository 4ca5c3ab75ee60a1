import logging
from enum import IntEnum

from .calibration_file import load_calibration, save_calibration
from .config import config
from .errors import CalibrationError, NoCalibrationError, NotCalibratedError
from .models import CalibrationStore, DataPoint, convert
from .prompts import Prompter, parse_int
from .regression import fit_points

logger = logging.getLogger(__name__)

NOT_CALIBRATED_HINT = "Please enter calibration data (option 1) or load from file (option 2) first."


class Command(IntEnum):
    ENTER_DATA = 1
    LOAD = 2
    CONVERT = 3
    SAVE = 4
    EXIT = 5


MENU_LABELS = {
    Command.ENTER_DATA: "Enter new calibration data",
    Command.LOAD: "Load existing calibration from file",
    Command.CONVERT: "Convert a raw reading",
    Command.SAVE: "Save current calibration to file",
    Command.EXIT: "Exit",
}


class CalibrationSession:
    """
    Menu-driven calibration workflow:
    1) Enter data points -> least squares fit
    2) Load slope/offset from file
    3) Convert raw readings
    4) Save slope/offset to file
    5) Exit

    The session owns the calibration store and hands it to each command.
    """

    def __init__(self, prompter: Prompter = None, store: CalibrationStore = None):
        self.prompter = prompter or Prompter(max_retries=config.INPUT_MAX_RETRIES,
                                             pause=config.PAUSE_AFTER_COMMAND)
        self.store = store if store is not None else CalibrationStore()
        self.handlers = {
            Command.ENTER_DATA: self.enter_calibration_data,
            Command.LOAD: self.load_calibration_from_file,
            Command.CONVERT: self.convert_raw_reading,
            Command.SAVE: self.save_calibration_to_file,
        }

    def _fmt(self, value: float) -> str:
        return f"{value:.{config.DISPLAY_DECIMALS}f}"

    # ===== MENU LOOP =====

    def display_banner(self):
        self.prompter.write("\n========================================")
        self.prompter.write(f"    {config.BANNER_TITLE}")
        self.prompter.write("========================================\n")

    def display_menu(self):
        self.prompter.write("\n--- MAIN MENU ---")
        for command in Command:
            self.prompter.write(f"{command.value}. {MENU_LABELS[command]}")
        self.prompter.write()

    def read_command(self):
        """Returns the chosen Command, or None after reporting a bad choice."""
        text = self.prompter.ask("Choose an option: ")
        try:
            choice = parse_int(text)
        except ValueError:
            logger.debug(f"Non-numeric menu choice {text!r}")
            self.prompter.write(f"\nInvalid input. Enter a number between 1 and {len(Command)}.")
            self.prompter.pause()
            return None
        try:
            return Command(choice)
        except ValueError:
            logger.debug(f"Out of range menu choice {choice}")
            self.prompter.write(f"\nInvalid option. Choose between 1 and {len(Command)}.")
            self.prompter.pause()
            return None

    def dispatch(self, command: Command):
        try:
            self.handlers[command]()
        except CalibrationError as e:
            logger.warning(f"{command.name} aborted: {e}")
            self.prompter.write(f"\nError: {e}")
            if isinstance(e, NotCalibratedError):
                self.prompter.write(NOT_CALIBRATED_HINT)
            self.prompter.pause()
            return
        # conversion already waited on the y/n answer
        if command != Command.CONVERT:
            self.prompter.pause()

    def run(self) -> int:
        logger.info("Calibration session started")
        self.display_banner()
        try:
            while True:
                self.display_menu()
                command = self.read_command()
                if command is None:
                    continue
                if command == Command.EXIT:
                    self.prompter.write("\nExiting program. Goodbye!")
                    break
                self.dispatch(command)
        except (EOFError, KeyboardInterrupt):
            logger.info("Input closed, ending session")
            self.prompter.write("\nExiting program. Goodbye!")
        logger.info("Calibration session finished")
        return 0

    # ===== COMMANDS =====

    def enter_calibration_data(self):
        self.prompter.write("\n=== ENTER CALIBRATION DATA ===")
        num_points = self.prompter.ask_int(
            f"Enter number of data points (minimum {config.MIN_POINTS}): ",
            minimum=config.MIN_POINTS,
        )

        points = []
        for i in range(num_points):
            self.prompter.write(f"\nPoint {i + 1}:")
            reference = self.prompter.ask_float("  Reference value: ", "  Invalid input. Enter a number.")
            raw = self.prompter.ask_float("  Raw reading: ", "  Invalid input. Enter a number.")
            points.append(DataPoint(reference, raw))

        fit = fit_points(points)
        calibration = self.store.set(fit["slope"], fit["offset"])

        self.prompter.write("\n--- CALIBRATION RESULTS ---")
        self.prompter.write(f"Slope:  {self._fmt(calibration.slope)}")
        self.prompter.write(f"Offset: {self._fmt(calibration.offset)}")
        self.prompter.write(
            f"R^2: {fit['r2']:.5f}   RMSE: {self._fmt(fit['rmse'])}   "
            f"MAE: {self._fmt(fit['mae'])}   MaxAbs: {self._fmt(fit['max_abs'])}   (n={fit['n_points']})"
        )
        self.prompter.write("\nCalibration updated successfully.")
        self.prompter.write(
            f"Formula: Real Value = {self._fmt(calibration.slope)} × Raw Reading + {self._fmt(calibration.offset)}"
        )
        return calibration

    def load_calibration_from_file(self):
        self.prompter.write("\n=== LOAD CALIBRATION ===")
        filename = self.prompter.ask_text(
            f"Enter filename (default: {config.DEFAULT_CALIBRATION_FILE}): ",
            default=config.DEFAULT_CALIBRATION_FILE,
        )
        calibration = load_calibration(self.store, filename)

        self.prompter.write("\n--- LOADED CALIBRATION ---")
        self.prompter.write(f"Slope:  {self._fmt(calibration.slope)}")
        self.prompter.write(f"Offset: {self._fmt(calibration.offset)}")
        self.prompter.write(f"\nCalibration loaded successfully from '{filename}'")
        return calibration

    def convert_raw_reading(self):
        self.prompter.write("\n=== CONVERT RAW READING ===")
        calibration = self.store.get()
        self.prompter.write(
            f"Current calibration: Slope = {self._fmt(calibration.slope)}, "
            f"Offset = {self._fmt(calibration.offset)}\n"
        )

        results = []
        while True:
            raw = self.prompter.ask_float("Enter raw sensor reading: ")
            real = convert(calibration, raw)
            results.append((raw, real))
            logger.debug(f"Converted raw={raw} -> real={real}")

            self.prompter.write(f"\nRaw Reading: {self._fmt(raw)}")
            self.prompter.write(f"Real Value:  {self._fmt(real)}\n")

            again = self.prompter.ask_yes_no("Convert another reading? (y/n): ")
            self.prompter.write()
            if not again:
                break
        return results

    def save_calibration_to_file(self):
        self.prompter.write("\n=== SAVE CALIBRATION ===")
        if not self.store.is_valid():
            raise NoCalibrationError()

        filename = self.prompter.ask_text(
            f"Enter filename to save (default: {config.DEFAULT_CALIBRATION_FILE}): ",
            default=config.DEFAULT_CALIBRATION_FILE,
        )
        save_calibration(self.store, filename)

        calibration = self.store.get()
        self.prompter.write(f"\nCalibration saved successfully to '{filename}'")
        self.prompter.write(f"Slope:  {calibration.slope:.{config.SAVE_DECIMALS}f}")
        self.prompter.write(f"Offset: {calibration.offset:.{config.SAVE_DECIMALS}f}")
        return filename

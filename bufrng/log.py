import datetime
import os
import re
import shutil
import sys
import time
from contextlib import contextmanager

from threading import Lock

_print_lock = Lock()
_verbose = False


class Colors:
    RESET = '\033[0m'
    INFO = '\033[37m'      # White (normal)
    WARNING = '\033[33m'   # Yellow
    ERROR = '\033[31m'     # Red
    SUCCESS = '\033[32m'   # Green
    DEBUG = '\033[90m'     # Grey
    CYAN = '\033[36m'


LEVEL_COLOURS = {
    'INFO': Colors.INFO,
    'WARNING': Colors.WARNING,
    'ERROR': Colors.ERROR,
    'SUCCESS': Colors.SUCCESS,
    'DEBUG': Colors.DEBUG,
}

# modules whose frames are skipped when naming the caller
_WRAPPER_MODULES = {'log', 'settings', '__main__'}


def _enable_windows_ansi() -> bool:
    try:
        import ctypes
        kernel32 = ctypes.windll.kernel32
        stdout_handle = kernel32.GetStdHandle(-11)
        console_mode = ctypes.c_uint32()
        if kernel32.GetConsoleMode(stdout_handle, ctypes.byref(console_mode)):
            # ENABLE_VIRTUAL_TERMINAL_PROCESSING
            kernel32.SetConsoleMode(stdout_handle, console_mode.value | 0x0004)
        return True
    except (AttributeError, OSError):
        return False


_ansi_supported = _enable_windows_ansi() if os.name == 'nt' else True
_ANSI_RE = re.compile(r'\033\[[0-9;]*[mK]')


def _emit(text, end='\n'):
    if not _ansi_supported:
        text = _ANSI_RE.sub('', text)
    sys.stdout.write(text + end)
    sys.stdout.flush()


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = bool(enabled)


def is_verbose() -> bool:
    return _verbose


def get_caller_name() -> str:
    """Module name of the first frame outside the logging wrappers."""
    frame = sys._getframe(1)
    name = 'unknown'
    while frame is not None:
        name = os.path.splitext(os.path.basename(frame.f_code.co_filename))[0]
        if name not in _WRAPPER_MODULES:
            return name
        frame = frame.f_back
    return name


def format_time(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m{secs:02d}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h{minutes:02d}m"


def format_rate(rate: float, unit: str = 'draw') -> str:
    prefix = ''
    for scale, symbol in ((1e6, 'M'), (1e3, 'k')):
        if rate >= scale:
            rate /= scale
            prefix = symbol
            break
    return f"{max(rate, 0.0):.1f}{prefix}{unit}/s"


def log(message: str, level: str = 'INFO') -> None:
    """Print one tab-separated line: timestamp, level, calling module, message.

    DEBUG lines are dropped unless verbose logging is on.
    """
    level = level.upper()
    if level == 'DEBUG' and not _verbose:
        return

    stamp = datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    colour = LEVEL_COLOURS.get(level, Colors.INFO)
    line = f"{colour}{stamp}\t{level}\t{get_caller_name()}\t{message}{Colors.RESET}"
    with _print_lock:
        _emit(line)


def info(message: str) -> None:
    log(message, 'INFO')


def warning(message: str) -> None:
    log(message, 'WARNING')


def error(message: str) -> None:
    log(message, 'ERROR')


def success(message: str) -> None:
    log(message, 'SUCCESS')


def debug(message: str) -> None:
    log(message, 'DEBUG')


class ProgressBar:
    """Single-line console progress meter used by the benchmark command."""

    def __init__(self, total=None, desc='', unit='draw', ncols=None, leave=True, mininterval=0.1):
        self.total = total
        self.desc = desc
        self.unit = unit
        self.width = ncols or shutil.get_terminal_size((80, 20)).columns
        self.leave = leave
        self.mininterval = mininterval

        self.count = 0
        self._started = time.monotonic()
        self._last_draw = None
        self._finished = False

    def _line(self):
        elapsed = time.monotonic() - self._started
        rate = self.count / elapsed if elapsed > 0 else 0.0
        label = f"{self.desc}: " if self.desc else ""
        stats = f"[{format_time(elapsed)}, {format_rate(rate, self.unit)}]"
        if not self.total:
            return f"{label}{self.count}{self.unit} {stats}"

        done = min(self.count / self.total, 1.0)
        tail = f" {self.count}/{self.total} {stats}"
        slots = max(10, self.width - len(label) - len(tail) - 7)
        filled = int(slots * done)
        bar = '#' * filled + '-' * (slots - filled)
        return f"{label}{done * 100:3.0f}%|{Colors.CYAN}{bar}{Colors.RESET}|{tail}"

    def update(self, n=1):
        if self._finished:
            return
        self.count += n
        now = time.monotonic()
        if self._last_draw is None or now - self._last_draw >= self.mininterval:
            self.refresh()
            self._last_draw = now

    def refresh(self):
        if self._finished:
            return
        with _print_lock:
            _emit(("" if self._last_draw is None else "\r") + self._line(), end='')

    def close(self):
        if self._finished:
            return
        self.refresh()
        self._finished = True
        with _print_lock:
            _emit('' if self.leave else f"\r{' ' * self.width}\r", end='\n' if self.leave else '')

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


@contextmanager
def progress_context(total=None, **kwargs):
    bar = ProgressBar(total=total, **kwargs)
    try:
        yield bar
    finally:
        bar.close()

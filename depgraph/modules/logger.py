import os
import sys
import datetime
import threading
import json

from depgraph.modules.config import config as _default_config

STATE_DIR = os.path.expanduser("~/.local/state/depgraph")


class Logger:
    LEVELS = {
        "debug": 10,
        "info": 20,
        "success": 25,
        "warning": 30,
        "error": 40,
    }

    LOG_COLORS = {
        "DEBUG": "\033[90m",    # Cinza
        "INFO": "\033[94m",     # Azul
        "SUCCESS": "\033[92m",  # Verde
        "WARNING": "\033[93m",  # Amarelo
        "ERROR": "\033[91m",    # Vermelho
        "RESET": "\033[0m"
    }

    def __init__(self, name="depgraph", conf=None, stream=None):
        conf = conf or _default_config
        self.name = name
        self.stream = stream
        self.log_file = conf.get("logging", "log_file", fallback=os.path.join(STATE_DIR, "depgraph.log"))
        self.history_file = conf.get("logging", "history_file", fallback=os.path.join(STATE_DIR, "history.log"))
        self.color_output = conf.getboolean("logging", "color_output", fallback=True)
        self.log_to_file = conf.getboolean("logging", "log_to_file", fallback=False)
        self.log_to_console = conf.getboolean("logging", "log_to_console", fallback=True)
        self.use_utc = conf.getboolean("logging", "timestamp_utc", fallback=False)
        self.log_format = conf.get("logging", "log_format", fallback="text").lower()
        self.max_log_size_kb = conf.getint("logging", "max_log_size_kb", fallback=0)

        level_str = conf.get("logging", "level", fallback="warning").lower()
        self.min_level = self.LEVELS.get(level_str, 30)

        if self.log_to_file:
            self._ensure_dir(self.log_file)
            self._ensure_dir(self.history_file)

        self._lock = threading.Lock()

    def set_level(self, level):
        self.min_level = self.LEVELS.get(level.lower(), self.min_level)

    def set_color(self, enabled):
        self.color_output = enabled

    def set_console(self, enabled):
        self.log_to_console = enabled

    def _ensure_dir(self, filepath):
        dirpath = os.path.dirname(filepath)
        if not dirpath:
            return
        try:
            os.makedirs(dirpath, exist_ok=True)
        except OSError as e:
            print(f"Logger: failed to create log directory {dirpath}: {e}", file=sys.stderr)

    def _get_timestamp(self):
        if self.use_utc:
            now = datetime.datetime.now(datetime.timezone.utc)
        else:
            now = datetime.datetime.now()
        return now.strftime("%Y-%m-%d %H:%M:%S")

    def _rotate_if_needed(self, filepath):
        if self.max_log_size_kb <= 0:
            return
        if os.path.exists(filepath) and os.path.getsize(filepath) > self.max_log_size_kb * 1024:
            rotated = filepath + ".1"
            try:
                if os.path.exists(rotated):
                    os.remove(rotated)
                os.rename(filepath, rotated)
            except OSError as e:
                print(f"Logger: error rotating log {filepath}: {e}", file=sys.stderr)

    def _write_file(self, filepath, message):
        if not self.log_to_file:
            return
        self._rotate_if_needed(filepath)
        try:
            with open(filepath, "a", encoding="utf-8") as f:
                f.write(message + "\n")
        except OSError as e:
            print(f"Logger: failed to write log file {filepath}: {e}", file=sys.stderr)

    def _format_text(self, level, message):
        timestamp = self._get_timestamp()
        return f"[{timestamp}] [{self.name}] [{level}] {message}"

    def _format_json(self, level, message):
        return json.dumps({
            "timestamp": self._get_timestamp(),
            "logger": self.name,
            "level": level,
            "message": message
        })

    def _format_message(self, level, message):
        if self.log_format == "json":
            return self._format_json(level, message)
        return self._format_text(level, message)

    def _log_to_console(self, formatted, level):
        if not self.log_to_console:
            return
        # stderr: stdout pertence às notificações do gerenciador
        stream = self.stream or sys.stderr
        if self.color_output and self.log_format == "text":
            color = self.LOG_COLORS.get(level.upper(), "")
            reset = self.LOG_COLORS.get("RESET", "")
            print(f"{color}{formatted}{reset}", file=stream)
        else:
            print(formatted, file=stream)

    def _should_log(self, level):
        return self.LEVELS.get(level.lower(), 0) >= self.min_level

    def _record_history(self, formatted):
        self._write_file(self.history_file, formatted)

    def log(self, level, message, *, to_history=False):
        level = level.upper()
        formatted = None
        with self._lock:
            if self._should_log(level):
                formatted = self._format_message(level, message)
                self._log_to_console(formatted, level)
                self._write_file(self.log_file, formatted)
            if to_history:
                self._record_history(formatted or self._format_message(level, message))

    def debug(self, message):
        self.log("DEBUG", message)

    def info(self, message, *, to_history=False):
        self.log("INFO", message, to_history=to_history)

    def success(self, message, *, to_history=False):
        self.log("SUCCESS", message, to_history=to_history)

    def warning(self, message, *, to_history=False):
        self.log("WARNING", message, to_history=to_history)

    def error(self, message, *, to_history=False):
        self.log("ERROR", message, to_history=to_history)

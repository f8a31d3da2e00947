# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
"""Audit trail of a provisioning run.

Every message and every command outcome is written to a log file
and mirrored to the console. Command output goes to the file only:
the console stays readable while the file keeps everything
needed to investigate a failure without re-running the whole sequence.

Entries look like "[2024-05-01 12:00:00] [INFO] message".
The file is append-only: it is never truncated, rotated or renamed.

Failed writes to the file or the console are reported on stderr
by the logging machinery; the run itself continues.
"""
import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional
from typing import TextIO

from jetson_setup._runner import CommandRunner


class Level(Enum):
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR


class _EntryFormatter(logging.Formatter):

    def __init__(self):
        super().__init__('[%(asctime)s] [%(level)s] %(message)s', datefmt='%Y-%m-%d %H:%M:%S')

    def format(self, record):
        record.level = Level(record.levelno).name
        return super().format(record)


class ExecutionLogger:

    def __init__(
            self,
            log_dir: Path,
            runner: CommandRunner,
            console: Optional[TextIO] = None,
            started_at: Optional[datetime] = None,
            ):
        started_at = started_at or datetime.now()
        self._path = Path(log_dir).absolute() / f'setup_jetson_{started_at:%Y%m%d_%H%M%S}.log'
        self._path.touch()
        self._path.chmod(0o644)
        self._runner = runner
        formatter = _EntryFormatter()
        self._file_handler = logging.FileHandler(self._path, mode='a', encoding='utf-8')
        self._file_handler.setFormatter(formatter)
        # Opened once: command output still has a destination
        # if the log directory is removed or its permissions change later.
        self._output = self._path.open('ab', buffering=0)
        self._console = console if console is not None else sys.stdout
        self._console_handler = logging.StreamHandler(self._console)
        self._console_handler.setFormatter(formatter)
        # Not registered in the logging hierarchy: each instance has its own sinks
        # and nothing configured on the root logger leaks into the audit log.
        self._logger = logging.Logger(f'{__name__}.{self._path.name}', logging.INFO)
        self._logger.propagate = False
        self._logger.addHandler(self._file_handler)
        self._logger.addHandler(self._console_handler)
        _logger.debug("Log file created: %s", self._path)

    def __repr__(self):
        return f'<{ExecutionLogger.__name__} {self._path}>'

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def path(self) -> Path:
        return self._path

    def log(self, level: Level, message: str):
        # Handlers flush after every record.
        self._logger.log(level.value, message)

    def show(self, text: str):
        """Print to the console only; prompts and hints are not audit entries."""
        try:
            print(text, file=self._console, flush=True)
        except (OSError, ValueError) as e:
            _logger.warning("Cannot write to console: %s", e)

    def run_logged(self, command: str) -> int:
        self.log(Level.INFO, f"Executing command: {command}")
        try:
            exit_status = self._runner.run(command, self._output)
        except OSError as e:
            self.log(Level.ERROR, f"Command could not be started: {command}: {e}")
            raise
        if exit_status != 0:
            self.log(Level.ERROR, f"Command failed with exit code {exit_status}: {command}")
        else:
            self.log(Level.INFO, f"Command finished successfully: {command}")
        return exit_status

    def close(self):
        for handler in (self._file_handler, self._console_handler):
            self._logger.removeHandler(handler)
        self._file_handler.close()
        self._console_handler.close()
        self._output.close()


_logger = logging.getLogger(__name__)

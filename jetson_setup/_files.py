# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import os
from pathlib import Path

from jetson_setup._core import Command
from jetson_setup._execution_log import Level


class SetEnv(Command):
    """Set variable for this process and all commands started after it.

    Equivalent of "export NAME=value" in the middle of a shell script.
    """

    def __init__(self, name: str, value: str):
        self._name = name
        self._value = value

    def __repr__(self):
        return f'{SetEnv.__name__}({self._name!r}, {self._value!r})'

    def run(self, execution):
        os.environ[self._name] = self._value
        execution.log(Level.INFO, f"Environment: {self._name}={self._value}")
        return 0


class AppendLine(Command):
    """Append a line to a text file unless the file already has it.

    >>> AppendLine('~/.bashrc', 'export A=1')
    AppendLine('~/.bashrc', 'export A=1')
    """

    def __init__(self, path: str, line: str):
        self._path = path
        self._line = line

    def __repr__(self):
        return f'{AppendLine.__name__}({self._path!r}, {self._line!r})'

    def run(self, execution):
        path = Path(self._path).expanduser()
        text = path.read_text(encoding='utf-8') if path.exists() else ''
        if self._line in text.splitlines():
            execution.log(Level.INFO, f"Already in {path}: {self._line}")
            return 0
        with path.open('a', encoding='utf-8') as f:
            if text and not text.endswith('\n'):
                f.write('\n')
            f.write(self._line + '\n')
        execution.log(Level.INFO, f"Appended to {path}: {self._line}")
        return 0


class MakeDirs(Command):

    def __init__(self, path: str):
        self._path = path

    def __repr__(self):
        return f'{MakeDirs.__name__}({self._path!r})'

    def run(self, execution):
        path = Path(self._path).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        execution.log(Level.INFO, f"Directory ready: {path}")
        return 0

# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import subprocess
from abc import ABCMeta
from abc import abstractmethod
from typing import BinaryIO


class CommandRunner(metaclass=ABCMeta):
    """Execute a command line and report its exit status.

    Output of the child, both stdout and stderr, goes to the given stream.
    """

    @abstractmethod
    def run(self, command: str, output: BinaryIO) -> int:
        pass


class ShellRunner(CommandRunner):

    def __repr__(self):
        return f'<{ShellRunner.__name__}>'

    def run(self, command, output):
        _logger.debug("Run: %s", command)
        # Shell is required: commands are written as one would type them,
        # with pipes, redirections and "sudo".
        # Stdin is inherited so sudo can ask for a password.
        process = subprocess.run(
            command,
            shell=True,
            stdout=output,
            stderr=subprocess.STDOUT,
            )
        _logger.debug("Exit status %d: %s", process.returncode, command)
        return process.returncode


_logger = logging.getLogger(__name__)

# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import os
import time
from pathlib import Path
from typing import Callable

from jetson_setup._core import Command
from jetson_setup._execution_log import Level


class RebootPrompt(Command):
    """Offer a reboot when the system asks for it.

    Package upgrades create the marker file when a reboot is needed
    to finish them. Without the marker, stdin is not read at all.
    """

    def __init__(
            self,
            marker: os.PathLike = '/var/run/reboot-required',
            read_answer: Callable[[], str] = input,
            sleep: Callable[[float], None] = time.sleep,
            delay_sec: float = 5,
            ):
        self._marker = Path(marker)
        self._read_answer = read_answer
        self._sleep = sleep
        self._delay_sec = delay_sec

    def __repr__(self):
        return f'{RebootPrompt.__name__}({str(self._marker)!r})'

    def run(self, execution):
        if not self._marker.exists():
            # Tools like jtop need a re-login or restart even without the marker.
            execution.log(
                Level.INFO,
                "Setup complete. No mandatory reboot flag found, "
                "but a reboot is recommended (e.g., for jtop).")
            execution.show(
                "Setup complete. Please reboot or log out/in to ensure all changes "
                "take effect (especially for tools like jtop).")
            return 0
        execution.log(Level.INFO, "System indicates a reboot is required.")
        execution.show("")
        execution.log(Level.INFO, "Setup complete. A reboot is required to finalize changes.")
        execution.show("Reboot now? (y/N)")
        try:
            answer = self._read_answer().strip()
        except EOFError:
            answer = ''
        execution.log(Level.INFO, f"User input for reboot: {answer}")
        if answer not in ('y', 'Y'):
            execution.log(Level.INFO, "User chose not to reboot now. Please reboot manually later.")
            execution.show("Please reboot manually later to complete setup.")
            return 0
        execution.log(Level.INFO, f"User chose to reboot. Rebooting in {self._delay_sec:g} seconds...")
        execution.show(f"Rebooting in {self._delay_sec:g} seconds...")
        self._sleep(self._delay_sec)
        return execution.run_logged('sudo reboot')

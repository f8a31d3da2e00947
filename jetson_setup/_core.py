# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import os
from abc import ABCMeta
from abc import abstractmethod
from typing import Callable
from typing import Optional
from typing import Sequence

from jetson_setup._execution_log import ExecutionLogger
from jetson_setup._execution_log import Level


class Command(metaclass=ABCMeta):

    @abstractmethod
    def run(self, execution: ExecutionLogger) -> int:
        """Perform the step and return its exit status, 0 meaning success."""
        pass


class Run(Command):

    def __init__(self, command: str):
        self._command = command

    def __repr__(self):
        return f'{Run.__name__}({self._command!r})'

    def run(self, execution):
        return execution.run_logged(self._command)


class CompositeCommand(Command):

    def __init__(self, commands: Sequence[Command]):
        self._commands: Sequence[Command] = commands

    def __repr__(self):
        return f'<{self.__class__.__name__} with {len(self._commands)} commands>'

    def run(self, execution):
        for command in self._commands:
            exit_status = command.run(execution)
            if exit_status != 0:
                return exit_status
        return 0


class Stage(CompositeCommand):
    """Named group of commands announced in the log before and after."""

    def __init__(self, start_message: str, commands: Sequence[Command], done_message: str):
        super().__init__(commands)
        self._start_message = start_message
        self._done_message = done_message

    def __repr__(self):
        return f'<{Stage.__name__} {self._start_message!r} with {len(self._commands)} commands>'

    def run(self, execution):
        execution.log(Level.INFO, self._start_message)
        exit_status = super().run(execution)
        if exit_status == 0:
            execution.log(Level.INFO, self._done_message)
        return exit_status


class Note(Command):

    def __init__(self, level: Level, message: str):
        self._level = level
        self._message = message

    def __repr__(self):
        return f'{Note.__name__}({self._level.name}, {self._message!r})'

    def run(self, execution):
        execution.log(self._level, self._message)
        return 0


class Outcome:

    def __init__(self, status: int, failed_command: Optional[Command] = None):
        self.status = status
        self.failed_command = failed_command

    def __repr__(self):
        if self.failed_command is None:
            return f'<{Outcome.__name__} success>'
        return f'<{Outcome.__name__} status {self.status} at {self.failed_command!r}>'

    @property
    def succeeded(self) -> bool:
        return self.status == 0


class Pipeline:
    """Run commands one by one and stop at the first failure.

    Nothing is retried: a failed step must be investigated by a human.
    """

    def __init__(
            self,
            commands: Sequence[Command],
            questionnaire: Optional['Questionnaire'] = None,
            ):
        self._commands = commands
        self._questionnaire = questionnaire or Questionnaire("Run")

    def __repr__(self):
        return f'<{Pipeline.__name__} with {len(self._commands)} commands>'

    def run(self, execution: ExecutionLogger) -> Outcome:
        for command in self._commands:
            execution.show(f"Command {command!r}")
            if not self._questionnaire.user_agrees_with(repr(command)):
                execution.log(Level.WARN, f"Skipped by user: {command!r}")
                continue
            exit_status = command.run(execution)
            if exit_status != 0:
                _logger.debug("Stop at %r: exit status %d", command, exit_status)
                return Outcome(exit_status, command)
        return Outcome(0)


class Questionnaire:
    """Ask before each command when JETSON_SETUP_ASK_FOR_CONFIRMATION is set.

    Answers: y - yes, n - no, a - yes to this and all following, d - no to all.
    """

    # Answer: (user agrees, same answer for all following questions).
    _answers = {
        'y': (True, False),
        'n': (False, False),
        'a': (True, True),
        'd': (False, True),
        }

    def __init__(self, prompt, read_answer: Callable[[str], str] = input):
        self._prompt = prompt
        self._read_answer = read_answer
        self._answer_for_all: Optional[str] = None

    def user_agrees_with(self, question):
        if not os.getenv('JETSON_SETUP_ASK_FOR_CONFIRMATION', ''):
            return True
        prompt = f"{self._prompt} {question} [y,n,a,d]? "
        if self._answer_for_all is not None:
            print(prompt + self._answer_for_all, flush=True)
            [agrees, _] = self._answers[self._answer_for_all]
            return agrees
        answer = self._read_answer(prompt)[:1].lower()
        while answer not in self._answers:
            answer = self._read_answer(prompt)[:1].lower()
        [agrees, for_all] = self._answers[answer]
        if for_all:
            self._answer_for_all = answer
        return agrees


_logger = logging.getLogger(__name__)

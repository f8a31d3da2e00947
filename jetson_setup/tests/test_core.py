# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import contextlib
import io
import logging
import os
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from jetson_setup._core import CompositeCommand
from jetson_setup._core import Note
from jetson_setup._core import Pipeline
from jetson_setup._core import Questionnaire
from jetson_setup._core import Run
from jetson_setup._core import Stage
from jetson_setup._execution_log import ExecutionLogger
from jetson_setup._execution_log import Level
from jetson_setup.tests._fakes import RecordingRunner
from jetson_setup.tests._fakes import read_entries


class _CommandTestCase(unittest.TestCase):

    def setUp(self):
        self._tempdir = TemporaryDirectory()
        self._runner = RecordingRunner(exit_statuses={'sudo apt upgrade -y': 100})
        self._console = io.StringIO()
        self._execution = ExecutionLogger(Path(self._tempdir.name), self._runner, console=self._console)
        self._confirmation = os.environ.pop('JETSON_SETUP_ASK_FOR_CONFIRMATION', None)

    def tearDown(self):
        if self._confirmation is None:
            os.environ.pop('JETSON_SETUP_ASK_FOR_CONFIRMATION', None)
        else:
            os.environ['JETSON_SETUP_ASK_FOR_CONFIRMATION'] = self._confirmation
        self._execution.close()
        self._tempdir.cleanup()


class TestCommands(_CommandTestCase):

    def test_run(self):
        self.assertEqual(Run('sudo apt update').run(self._execution), 0)
        self.assertEqual(self._runner.commands, ['sudo apt update'])
        self.assertEqual(Run('sudo apt upgrade -y').run(self._execution), 100)

    def test_composite_stops_at_first_failure(self):
        composite = CompositeCommand([
            Run('sudo apt update'),
            Run('sudo apt upgrade -y'),
            Run('sudo apt install -y dolphin'),
            ])
        self.assertEqual(composite.run(self._execution), 100)
        self.assertEqual(self._runner.commands, ['sudo apt update', 'sudo apt upgrade -y'])

    def test_stage_success(self):
        stage = Stage("Starting system update...", [Run('sudo apt update')], "System update completed.")
        self.assertEqual(stage.run(self._execution), 0)
        self.assertEqual(read_entries(self._execution.path), [
            ('INFO', "Starting system update..."),
            ('INFO', "Executing command: sudo apt update"),
            ('INFO', "Command finished successfully: sudo apt update"),
            ('INFO', "System update completed."),
            ])

    def test_stage_failure(self):
        stage = Stage("Starting system upgrade...", [Run('sudo apt upgrade -y')], "System upgrade completed.")
        self.assertEqual(stage.run(self._execution), 100)
        entries = read_entries(self._execution.path)
        self.assertEqual(entries[-1], ('ERROR', "Command failed with exit code 100: sudo apt upgrade -y"))
        self.assertNotIn(('INFO', "System upgrade completed."), entries)

    def test_note(self):
        self.assertEqual(Note(Level.WARN, "Heads up").run(self._execution), 0)
        self.assertEqual(read_entries(self._execution.path), [('WARN', "Heads up")])
        self.assertEqual(self._runner.commands, [])


class TestPipeline(_CommandTestCase):

    def test_all_succeed(self):
        pipeline = Pipeline([Run('sudo apt update'), Run('sudo apt install -y konsole')])
        with contextlib.redirect_stdout(io.StringIO()):
            outcome = pipeline.run(self._execution)
        self.assertTrue(outcome.succeeded)
        self.assertEqual(outcome.status, 0)
        self.assertIsNone(outcome.failed_command)
        self.assertEqual(self._runner.commands, ['sudo apt update', 'sudo apt install -y konsole'])

    def test_stops_at_first_failure(self):
        failing = Run('sudo apt upgrade -y')
        pipeline = Pipeline([Run('sudo apt update'), failing, Run('sudo apt install -y konsole')])
        with contextlib.redirect_stdout(io.StringIO()):
            outcome = pipeline.run(self._execution)
        self.assertFalse(outcome.succeeded)
        self.assertEqual(outcome.status, 100)
        self.assertIs(outcome.failed_command, failing)
        self.assertEqual(self._runner.commands, ['sudo apt update', 'sudo apt upgrade -y'])

    def test_prints_commands(self):
        pipeline = Pipeline([Run('sudo apt update')])
        with contextlib.redirect_stdout(io.StringIO()) as stdout:
            pipeline.run(self._execution)
        self.assertIn("Command Run('sudo apt update')", self._console.getvalue().splitlines())
        self.assertEqual(stdout.getvalue(), "")

    def test_confirmation(self):
        os.environ['JETSON_SETUP_ASK_FOR_CONFIRMATION'] = '1'
        answers = iter(['n', 'y'])
        questionnaire = Questionnaire("Run", read_answer=lambda _prompt: next(answers))
        pipeline = Pipeline([Run('sudo apt update'), Run('sudo apt install -y konsole')], questionnaire)
        with contextlib.redirect_stdout(io.StringIO()):
            outcome = pipeline.run(self._execution)
        self.assertTrue(outcome.succeeded)
        self.assertEqual(self._runner.commands, ['sudo apt install -y konsole'])
        self.assertIn(('WARN', "Skipped by user: Run('sudo apt update')"), read_entries(self._execution.path))


class TestQuestionnaire(unittest.TestCase):

    def setUp(self):
        self._confirmation = os.environ.get('JETSON_SETUP_ASK_FOR_CONFIRMATION')
        os.environ['JETSON_SETUP_ASK_FOR_CONFIRMATION'] = '1'

    def tearDown(self):
        if self._confirmation is None:
            os.environ.pop('JETSON_SETUP_ASK_FOR_CONFIRMATION', None)
        else:
            os.environ['JETSON_SETUP_ASK_FOR_CONFIRMATION'] = self._confirmation

    def test_not_asked_without_variable(self):
        del os.environ['JETSON_SETUP_ASK_FOR_CONFIRMATION']
        questionnaire = Questionnaire("Run", read_answer=_unexpected_read)
        self.assertTrue(questionnaire.user_agrees_with("anything"))

    def test_repeats_on_unknown_answer(self):
        answers = iter(['', 'maybe', 'Yes'])
        prompts = []

        def read_answer(prompt):
            prompts.append(prompt)
            return next(answers)

        questionnaire = Questionnaire("Run", read_answer=read_answer)
        self.assertTrue(questionnaire.user_agrees_with("step"))
        self.assertEqual(prompts, ["Run step [y,n,a,d]? "] * 3)

    def test_all(self):
        answers = iter(['a'])
        questionnaire = Questionnaire("Run", read_answer=lambda _prompt: next(answers))
        with contextlib.redirect_stdout(io.StringIO()) as stdout:
            self.assertTrue(questionnaire.user_agrees_with("first"))
            self.assertTrue(questionnaire.user_agrees_with("second"))
            self.assertTrue(questionnaire.user_agrees_with("third"))
        self.assertIn("Run third [y,n,a,d]? a", stdout.getvalue())

    def test_none(self):
        answers = iter(['d'])
        questionnaire = Questionnaire("Run", read_answer=lambda _prompt: next(answers))
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertFalse(questionnaire.user_agrees_with("first"))
            self.assertFalse(questionnaire.user_agrees_with("second"))

    def test_single_answer_not_remembered(self):
        answers = iter(['n', 'y'])
        questionnaire = Questionnaire("Run", read_answer=lambda _prompt: next(answers))
        self.assertFalse(questionnaire.user_agrees_with("first"))
        self.assertTrue(questionnaire.user_agrees_with("second"))


def _unexpected_read(prompt):
    raise AssertionError(f"Unexpected question: {prompt}")


if __name__ == '__main__':
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)7s %(name)s %(message).5000s",
        )
    unittest.main()

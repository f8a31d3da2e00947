# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
"""Provisioning of a freshly flashed NVIDIA Jetson.

The goal is to keep the device setup in code under version control.
It serves as documentation for what is installed and configured.

Every action is formulated in terms of a command.
In most cases, it is a Run object, a Stage grouping several of them
or an instance of another Command subclass.
It is desirable that commands be written in the most raw form,
so that it is clear what is being run and it is easy to copy.

Commands should be idempotent.
The second run must not "accumulate" changes.

Commands are not executed directly, only via a Pipeline
and an ExecutionLogger. This gives uniform logging:
each command line and its outcome are written to the log file and to the console,
the output of the command goes to the log file.

The pipeline stops at the first failed command. Nothing is retried.
If a step fails, the human who runs it must investigate the problem
using the log file.
"""
from jetson_setup._core import Command
from jetson_setup._core import CompositeCommand
from jetson_setup._core import Note
from jetson_setup._core import Outcome
from jetson_setup._core import Pipeline
from jetson_setup._core import Questionnaire
from jetson_setup._core import Run
from jetson_setup._core import Stage
from jetson_setup._execution_log import ExecutionLogger
from jetson_setup._execution_log import Level
from jetson_setup._files import AppendLine
from jetson_setup._files import MakeDirs
from jetson_setup._files import SetEnv
from jetson_setup._packages import AddPackagecloudRepository
from jetson_setup._packages import AptInstall
from jetson_setup._packages import InstallRosAptSource
from jetson_setup._packages import VerifyExecutable
from jetson_setup._reboot import RebootPrompt
from jetson_setup._release_info import GitHubReleases
from jetson_setup._release_info import ReleaseInfoFetcher
from jetson_setup._release_info import ReleaseInfoUnavailable
from jetson_setup._runner import CommandRunner
from jetson_setup._runner import ShellRunner

__all__ = [
    'AddPackagecloudRepository',
    'AppendLine',
    'AptInstall',
    'Command',
    'CommandRunner',
    'CompositeCommand',
    'ExecutionLogger',
    'GitHubReleases',
    'InstallRosAptSource',
    'Level',
    'MakeDirs',
    'Note',
    'Outcome',
    'Pipeline',
    'Questionnaire',
    'ReleaseInfoFetcher',
    'ReleaseInfoUnavailable',
    'RebootPrompt',
    'Run',
    'SetEnv',
    'ShellRunner',
    'Stage',
    'VerifyExecutable',
    ]

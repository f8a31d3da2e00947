# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
"""Post-flash setup of an NVIDIA Jetson for SMACC2.

Run it on the Jetson itself as a regular user with sudo rights:

    python3 -m jetson_setup.smacc2_jetson

The log file is created in the current directory unless --log-dir is given.
"""
import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import Sequence

from jetson_setup._config import Config
from jetson_setup._config import read_config
from jetson_setup._core import Command
from jetson_setup._core import Note
from jetson_setup._core import Pipeline
from jetson_setup._core import Run
from jetson_setup._core import Stage
from jetson_setup._execution_log import ExecutionLogger
from jetson_setup._execution_log import Level
from jetson_setup._files import AppendLine
from jetson_setup._files import MakeDirs
from jetson_setup._files import SetEnv
from jetson_setup._logging import init_logging
from jetson_setup._packages import AddPackagecloudRepository
from jetson_setup._packages import AptInstall
from jetson_setup._packages import InstallRosAptSource
from jetson_setup._packages import VerifyExecutable
from jetson_setup._reboot import RebootPrompt
from jetson_setup._release_info import GitHubReleases
from jetson_setup._release_info import ReleaseInfoFetcher
from jetson_setup._runner import ShellRunner


def smacc2_jetson_commands(config: Config, fetcher: ReleaseInfoFetcher) -> Sequence[Command]:
    distro = config['ros_distro']
    locale = config['locale']
    [language, _, _] = locale.partition('.')
    workspace = Path(config['workspace_dir']).expanduser()
    bashrc = config['bashrc']
    return [
        Stage("Starting system update...", [
            Run('sudo apt update'),
            ], "System update completed."),
        Stage("Starting system update and upgrade...", [
            Run('sudo apt upgrade -y'),
            ], "System upgrade completed."),
        Stage("Starting dolphin installation...", [
            AptInstall('konsole'),
            Note(Level.INFO, "Konsole install completed."),
            AptInstall('dolphin'),
            ], "Dolphin install completed."),
        Stage("Installing Python3 pip...", [
            AptInstall('python3-pip'),
            ], "Python3 pip installation completed."),

        # ROS 2 requires a UTF-8 locale.
        # See: https://docs.ros.org/en/humble/Installation/Ubuntu-Install-Debians.html
        Stage("Setting locale...", [
            Run('locale'),
            Run('sudo apt update'),
            AptInstall('locales'),
            Run(f'sudo locale-gen {language} {locale}'),
            Run(f'sudo update-locale LC_ALL={locale} LANG={locale}'),
            SetEnv('LANG', locale),
            Run('locale'),
            ], "Locale Set..."),
        Stage("Adding ROS2 apt repositories...", [
            AptInstall('software-properties-common'),
            Run('sudo add-apt-repository universe -y'),
            Run('sudo apt update'),
            AptInstall('curl'),
            InstallRosAptSource(fetcher, config['ros_apt_source_repo'], config['os_release']),
            Run('sudo apt update'),
            ], "ROS2 apt repositories added..."),
        Stage("Installing ROS2...", [
            AptInstall(f'ros-{distro}-desktop'),
            AptInstall('ros-dev-tools'),
            AppendLine(bashrc, f'source /opt/ros/{distro}/setup.bash'),
            ], "ROS2 Installed..."),
        Stage("Installing rosdep...", [
            AptInstall('python3-rosdep'),
            # "rosdep init" fails if the default sources list already exists.
            Run('[ -e /etc/ros/rosdep/sources.list.d/20-default.list ] || sudo rosdep init'),
            Run('rosdep update'),
            ], "rosdep Installed..."),
        Stage("Creating isaac_ros-dev workspace...", [
            MakeDirs(str(workspace / 'src')),
            AppendLine(bashrc, f'export ISAAC_ROS_WS={workspace}/'),
            SetEnv('ISAAC_ROS_WS', f'{workspace}/'),
            ], "isaac_ros-dev workspace created..."),

        # See: https://code.visualstudio.com/docs/setup/linux
        Stage("Installing Visual Studio Code...", [
            AptInstall('wget', 'gpg'),
            Run('wget -qO- https://packages.microsoft.com/keys/microsoft.asc | gpg --dearmor > /tmp/packages.microsoft.gpg'),
            Run('sudo install -D -o root -g root -m 644 /tmp/packages.microsoft.gpg /etc/apt/keyrings/packages.microsoft.gpg'),
            Run(
                'echo "deb [arch=amd64,arm64,armhf signed-by=/etc/apt/keyrings/packages.microsoft.gpg] '
                f'{config["vscode_apt_repo"]} stable main" | sudo tee /etc/apt/sources.list.d/vscode.list > /dev/null'),
            Run('rm -f /tmp/packages.microsoft.gpg'),
            AptInstall('apt-transport-https'),
            Run('sudo apt update'),
            AptInstall('code'),
            VerifyExecutable('code', '--version', title="Visual Studio Code"),
            ], "Visual Studio Code installed..."),
        Stage("Installing SMACC2_RTA...", [
            AddPackagecloudRepository(config['packagecloud_repo'], config['packagecloud_token']),
            AptInstall(config['vendor_package']),
            ], "SMACC2_RTA Installed..."),
        ]


def provision(
        execution: ExecutionLogger,
        commands: Sequence[Command],
        reboot_prompt: Command,
        ) -> int:
    execution.log(Level.INFO, f"Starting SMACC2 Jetson Config script. Log file: {execution.path}")
    outcome = Pipeline(commands).run(execution)
    if not outcome.succeeded:
        execution.log(Level.ERROR, f"Jetson setup aborted at {outcome.failed_command!r}")
        return outcome.status
    exit_status = reboot_prompt.run(execution)
    if exit_status != 0:
        return exit_status
    execution.log(Level.INFO, "Jetson setup script finished.")
    return 0


def main(args: Sequence[str]) -> int:
    parser = ArgumentParser(description="Set up a freshly flashed Jetson for SMACC2")
    parser.add_argument('--log-dir', type=Path, default=Path('.'), help=(
        "directory for the setup_jetson_*.log file; default: current directory"))
    parser.add_argument('--config', type=Path, help=(
        "INI file overriding jetson_setup/config.ini and ~/.config/jetson_setup.ini"))
    parsed = parser.parse_args(args)
    if not parsed.log_dir.is_dir():
        parser.error(f"log directory does not exist: {parsed.log_dir}")
    config = read_config(parsed.config)
    commands = smacc2_jetson_commands(config, GitHubReleases(config['github_api_url']))
    with ExecutionLogger(parsed.log_dir, ShellRunner()) as execution:
        return provision(execution, commands, RebootPrompt(config['reboot_marker']))


def cli():
    init_logging()
    sys.exit(main(sys.argv[1:]))


if __name__ == '__main__':
    cli()

# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import os
import shlex
import shutil

from jetson_setup._core import Command
from jetson_setup._core import CompositeCommand
from jetson_setup._core import Run
from jetson_setup._execution_log import Level
from jetson_setup._os_release import os_codename
from jetson_setup._release_info import ReleaseInfoFetcher
from jetson_setup._release_info import ReleaseInfoUnavailable

VERIFICATION_FAILED = 1


class AptInstall(Run):
    """Install packages non-interactively.

    >>> AptInstall('konsole')
    AptInstall('konsole')
    >>> AptInstall('ros-humble-desktop', 'ros-dev-tools')._command
    'sudo apt install -y ros-humble-desktop ros-dev-tools'
    """

    def __init__(self, *packages: str):
        super().__init__('sudo apt install -y ' + shlex.join(packages))
        self._packages = packages

    def __repr__(self):
        return f'{AptInstall.__name__}({", ".join(repr(p) for p in self._packages)})'


class InstallRosAptSource(Command):
    """Install the package that configures ROS 2 apt repositories.

    The package version is the latest release of ros-apt-source,
    the package name carries the Ubuntu codename.
    See: https://github.com/ros-infrastructure/ros-apt-source
    """

    _download_path = '/tmp/ros2-apt-source.deb'

    def __init__(
            self,
            fetcher: ReleaseInfoFetcher,
            repo: str = 'ros-infrastructure/ros-apt-source',
            os_release_path: os.PathLike = '/etc/os-release',
            ):
        self._fetcher = fetcher
        self._repo = repo
        self._os_release_path = os_release_path

    def __repr__(self):
        return f'{InstallRosAptSource.__name__}({self._repo!r})'

    def run(self, execution):
        try:
            tag = self._fetcher.latest_tag(self._repo)
        except ReleaseInfoUnavailable as e:
            execution.log(Level.ERROR, f"Cannot get latest release of {self._repo}: {e}")
            return 1
        codename = os_codename(self._os_release_path)
        execution.log(Level.INFO, f"Using {self._repo} {tag} for {codename}")
        url = (
            f'https://github.com/{self._repo}/releases/download/'
            f'{tag}/ros2-apt-source_{tag}.{codename}_all.deb')
        download = CompositeCommand([
            Run(f'curl -L -o {self._download_path} {shlex.quote(url)}'),
            Run(f'sudo dpkg -i {self._download_path}'),
            ])
        return download.run(execution)


class AddPackagecloudRepository(Command):
    """Run the packagecloud setup script for a repository that requires a token.

    The token reaches the shell through the environment:
    the command line, which is logged, only references it.
    """

    _token_variable = 'PACKAGECLOUD_TOKEN'

    def __init__(self, repo: str, token: str):
        self._repo = repo
        self._token = token

    def __repr__(self):
        return f'{AddPackagecloudRepository.__name__}({self._repo!r})'

    def run(self, execution):
        url = f'https://${{{self._token_variable}}}:@packagecloud.io/install/repositories/{self._repo}/script.deb.sh'
        previous = os.environ.get(self._token_variable)
        os.environ[self._token_variable] = self._token
        try:
            return execution.run_logged(f'curl -s "{url}" | sudo bash')
        finally:
            if previous is None:
                del os.environ[self._token_variable]
            else:
                os.environ[self._token_variable] = previous


class VerifyExecutable(Command):
    """Check an installed program is on PATH and able to tell its version."""

    def __init__(self, name: str, *version_args: str, title: str = ''):
        self._name = name
        self._version_args = version_args or ('--version',)
        self._title = title or name

    def __repr__(self):
        return f'{VerifyExecutable.__name__}({self._name!r})'

    def run(self, execution):
        executable = shutil.which(self._name)
        if executable is None:
            execution.log(Level.ERROR, f"{self._title} installation failed: {self._name} is not found")
            return VERIFICATION_FAILED
        _logger.debug("Found %s: %s", self._name, executable)
        exit_status = execution.run_logged(shlex.join([self._name, *self._version_args]))
        if exit_status != 0:
            return exit_status
        execution.log(Level.INFO, f"{self._title} installed successfully")
        return 0


_logger = logging.getLogger(__name__)

# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import csv
import os
from typing import Iterable
from typing import Mapping


def os_codename(path: os.PathLike = '/etc/os-release') -> str:
    with open(path, mode='r') as f:
        identification = _parse(f)
    for key in ('VERSION_CODENAME', 'UBUNTU_CODENAME'):
        codename = identification.get(key)
        if codename:
            return codename
    raise RuntimeError(f"No release codename in {path}")


def _parse(lines: Iterable[str]) -> Mapping[str, str]:
    """Parse os-release lines. Values may be quoted, comments and blanks are skipped.

    >>> _parse(['NAME="Ubuntu"', '# comment', '', 'VERSION_CODENAME=jammy'])
    {'NAME': 'Ubuntu', 'VERSION_CODENAME': 'jammy'}
    """
    reader = csv.reader(lines, delimiter='=')
    return {
        row[0]: row[1]
        for row in reader
        if len(row) == 2 and not row[0].startswith('#')
        }

#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import logging
import os.path
import subprocess


production: bool = int(os.environ.get('PRODUCTION', '0')) != 0


log_level: int = logging.getLevelName(os.environ.get('PPH_LOG_LEVEL', 'INFO').upper())
if not isinstance(log_level, int):
    log_level = logging.INFO


log_format = '%(asctime)s %(name)s %(levelname)s %(message)s'


def get_version() -> str:
    try:
        version = subprocess.check_output([
            'git',
                '-C', os.path.dirname(os.path.abspath(__file__)),
            'show',
                '-s',
                '--date=format:%Y-%m-%d',
                '--format=%h (%cd)',
                'HEAD',
        ], text=True, stderr=subprocess.DEVNULL)
    except (FileNotFoundError, subprocess.CalledProcessError):
        version = 'unknown'
    else:
        version = version.rstrip()
    return version

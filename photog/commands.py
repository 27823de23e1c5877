"""
Calling the external image-processing commands.

Each command gets its file arguments positionally and has to exit with
status 0. Anything else aborts the build (see ``BuildOptions.keep_going``
for the alternative).
"""

import subprocess

from .errors import CollaboratorError
from .log import LogConfig


def run(command: str, *args, log: LogConfig | None = None):
    argv = [str(command), *(str(arg) for arg in args)]
    if log is not None:
        log.debug("$ %s", " ".join(argv))
    try:
        result = subprocess.run(argv)
    except OSError as e:
        raise CollaboratorError(argv, None, e.strerror or str(e)) from e
    if result.returncode != 0:
        raise CollaboratorError(argv, result.returncode)


def scale(command, source, destination, log=None):
    run(command, source, destination, log=log)


def watermark(command, source, watermark_file, destination, log=None):
    run(command, source, watermark_file, destination, log=log)


def thumbnail(command, source, destination, log=None):
    run(command, source, destination, log=log)


def preview(command, images, destination, log=None):
    run(command, *images, destination, log=log)

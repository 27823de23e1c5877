from dataclasses import dataclass, field

from .errors import CollaboratorError
from .log import LogConfig


@dataclass
class BuildOptions:
    """How a website is built.

    keep_going
        Log failing image commands and carry on, instead of aborting.
        The failures are collected in ``failures``.
    prune
        Delete destination files that no longer have a source. When false
        they are only reported.
    """

    log: LogConfig = field(default_factory=LogConfig)
    keep_going: bool = False
    prune: bool = True
    failures: list[CollaboratorError] = field(default_factory=list)

    def call(self, func, *args) -> bool:
        """Run an image command, return False if it failed and we keep going."""
        try:
            func(*args, log=self.log)
        except CollaboratorError as e:
            if not self.keep_going:
                raise
            self.log.error("%s", e)
            self.failures.append(e)
            return False
        return True

"""Runs a kubenode subcommand in the reactor and turns its outcome into
an exit status.
"""
import sys

from twisted.internet import defer

from kubenode.errors import (
    ClusterConfigError, DriverError, HostNotFound, HostSaveError,
    InvalidMachine, KubenodeError, MachineClientError,
    ProvisionerDetectionError, ProvisionerError)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 3
EXIT_MACHINE_NOT_FOUND = 4
EXIT_MACHINE_INVALID = 5
EXIT_DETECT = 6
EXIT_PROVISION = 7
EXIT_SAVE = 8
EXIT_DRIVER = 9
EXIT_UNEXPECTED = 70

# Checked in order, so subclasses come before their bases.
EXIT_CODES = [
    (ClusterConfigError, EXIT_CONFIG),
    (HostNotFound, EXIT_MACHINE_NOT_FOUND),
    (InvalidMachine, EXIT_MACHINE_INVALID),
    (ProvisionerDetectionError, EXIT_DETECT),
    (ProvisionerError, EXIT_PROVISION),
    (HostSaveError, EXIT_SAVE),
    (MachineClientError, EXIT_SAVE),
    (DriverError, EXIT_DRIVER),
    (KubenodeError, EXIT_FAILURE),
    ]


def _get_reactor():
    from twisted.internet import reactor
    return reactor


def get_exit_code(error):
    """Exit status for a command that failed with `error`.

    Errors from outside the kubenode hierarchy are bugs, and get
    :data:`EXIT_UNEXPECTED`.
    """
    for error_class, code in EXIT_CODES:
        if isinstance(error, error_class):
            return code
    return EXIT_UNEXPECTED


class Commander(object):
    """Runs `callback` with the parsed options once the reactor starts,
    then stops the reactor and exits with a status reflecting the result.
    """

    def __init__(self, callback):
        if not callable(callback):
            raise ValueError(
                "Commander callback argument must be a callable")

        self.callback = callback
        self.options = None
        self.exit_code = EXIT_OK

    @property
    def name(self):
        return self.callback.__module__.rsplit(".", 1)[-1]

    def __call__(self, options):
        reactor = _get_reactor()
        self.options = options
        reactor.callWhenRunning(self._run)
        reactor.run()
        sys.exit(self.exit_code)

    def _run(self):
        d = defer.maybeDeferred(self.callback, self.options)
        d.addCallbacks(self._succeeded, self._failed)
        d.addBoth(self._stop)
        return d

    def _succeeded(self, result):
        self.options.log.info("%r command finished successfully", self.name)

    def _failed(self, failure, stream=None):
        if stream is None:
            stream = sys.stderr
        log = self.options.log
        expected = failure.check(KubenodeError) is not None
        self.exit_code = get_exit_code(failure.value)

        if expected:
            message = failure.getErrorMessage()
        else:
            message = "Unexpected error: %s" % failure.getErrorMessage()
        if self.options.verbose:
            stream.write(failure.getTraceback())
        elif not expected:
            log.error(failure.getTraceback())

        print(message, file=stream)
        log.error("%r command failed with exit status %d: %s",
                  self.name, self.exit_code, message)

    def _stop(self, result):
        reactor = _get_reactor()
        if reactor.running:
            reactor.stop()

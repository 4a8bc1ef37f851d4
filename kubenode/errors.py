"""
This file holds the errors which are sensible for several areas of
kubenode.
"""


class KubenodeError(Exception):
    """All errors in kubenode are subclasses of this.

    This error should not be raised by itself, though, since it means
    pretty much nothing.  It's useful mostly as something to catch instead.
    """


class FileNotFound(KubenodeError):
    """Raised when a file is not found.

    @ivar path: Path of the directory or file which wasn't found.
    """

    def __init__(self, path):
        self.path = path

    def __str__(self):
        return "File was not found: %r" % (self.path,)


class MachineClientError(KubenodeError):
    """Raised when the machine store can't be reached or read."""


class HostNotFound(KubenodeError):
    """Raised when a machine store holds no record for a machine name."""

    def __init__(self, name):
        self.name = name

    def __str__(self):
        return "host is nil: no machine record for %r" % (self.name,)


class InvalidMachine(KubenodeError):
    """Raised when a loaded machine record is not structurally complete."""

    def __init__(self, name):
        self.name = name

    def __str__(self):
        return "Machine %r is missing essential information" % (self.name,)


class DriverError(KubenodeError):
    """Raised when a driver fails to talk to its machine.

    @ivar output: Captured output of the failing command, if any.
    """

    def __init__(self, message, output=None):
        super(DriverError, self).__init__(message)
        self.output = output


class ProvisionerError(KubenodeError):
    """Raised when a provisioner fails to configure a node."""


class NoProvisionerDetected(ProvisionerError):
    """Raised when no provisioner accepts the operating system of a node."""

    def __init__(self, os_release):
        self.os_release = os_release

    def __str__(self):
        return "No provisioner found for operating system %r" % (
            self.os_release.pretty_name or self.os_release.id)


class ContextError(KubenodeError):
    """An error wrapping another one with a short description of the step
    that failed.

    @ivar context: What was being done when `error` happened.
    @ivar error: The wrapped exception.
    """

    def __init__(self, context, error):
        super(ContextError, self).__init__(context, error)
        self.context = context
        self.error = error
        self.__cause__ = error

    def __str__(self):
        return "%s: %s" % (self.context, self.error)


class ProvisionerDetectionError(ContextError):
    """The operating system of a live node could not be classified."""

    def __init__(self, error):
        super(ProvisionerDetectionError, self).__init__("fast detect", error)


class HostSaveError(ContextError):
    """A host record could not be persisted."""

    def __init__(self, error):
        super(HostSaveError, self).__init__("save", error)


class ClusterConfigError(KubenodeError):
    """Raised when the cluster configuration has problems."""

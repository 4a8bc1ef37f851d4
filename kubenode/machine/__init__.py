from twisted.internet.defer import inlineCallbacks

from kubenode.errors import HostNotFound


class Machine(object):
    """
    Wraps a :class:`kubenode.host.Host` loaded from the machine store.

    Nothing guarantees a loaded record is complete; call :meth:`is_valid`
    before touching the driver or the host options.
    """

    def __init__(self, host):
        self.host = host

    @property
    def name(self):
        return self.host.name

    @property
    def driver(self):
        return self.host.driver

    @property
    def host_options(self):
        return self.host.host_options

    @property
    def raw_driver(self):
        return self.host.raw_driver

    def is_valid(self):
        """Whether the machine has the essential info needed to use it."""
        return is_valid(self)

    def __repr__(self):
        return "<Machine %r>" % (self.host,)


def is_valid(machine):
    """Check a machine, which may be None, for structural completeness."""
    if machine is None:
        return False

    host = machine.host
    if host is None:
        return False

    if not host.name:
        return False

    if host.driver is None:
        return False

    if host.host_options is None:
        return False

    if host.raw_driver is None:
        return False
    return True


def load_host(api, name):
    """Resolve a host record by name.

    :return: the :class:`kubenode.host.Host`, or None if no record exists
    :rtype: :class:`twisted.internet.defer.Deferred`
    """
    return api.load(name)


@inlineCallbacks
def load_machine(api, name):
    """Load the machine named `name` from the machine store.

    :param api: management client, such as
        :class:`kubenode.machine.client.LocalClient`

    :raises: :exc:`kubenode.errors.HostNotFound` when there is no record;
        client failures propagate as they are.
    """
    host = yield load_host(api, name)
    if host is None:
        raise HostNotFound(name)
    return Machine(host)

import logging
import subprocess

from twisted.internet.threads import deferToThread

from kubenode.errors import DriverError

log = logging.getLogger("kubenode.drivers")


def _cmd(args):
    p = subprocess.Popen(
        args, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
    stdout_data, _ = p.communicate()
    output = stdout_data.decode("utf-8", "replace")
    if p.returncode != 0:
        raise DriverError(
            "Command %r exited with status %s" % (args[0], p.returncode),
            output)
    return output


def run(args):
    """Run `args` in a thread, returning a Deferred firing with its output.

    A non-zero exit status fails the Deferred with a :class:`DriverError`
    carrying the combined stdout/stderr.
    """
    log.debug("Running: %s", " ".join(args))
    return deferToThread(_cmd, args)


class Driver(object):
    """Controls the machine, container or host backing a node.

    Subclasses override :meth:`get_ip` and :meth:`run_command`. The
    machine lifecycle (create, start, stop, remove) belongs to the
    driver plugins and is not modelled here.
    """

    default_name = None

    def __init__(self, machine_name, name=None, ip_address="",
                 ssh_user="docker", ssh_port=22, ssh_key_path="",
                 store_path=""):
        self.machine_name = machine_name
        self._name = name or self.default_name
        self.ip_address = ip_address
        self.ssh_user = ssh_user
        self.ssh_port = ssh_port
        self.ssh_key_path = ssh_key_path
        self.store_path = store_path

    def driver_name(self):
        return self._name

    def get_ip(self):
        """Get the network address currently assigned to the machine.

        :rtype: :class:`twisted.internet.defer.Deferred` firing with a str

        :raises: :exc:`kubenode.errors.DriverError`
        """
        raise NotImplementedError()

    def run_command(self, command):
        """Run a shell command on the machine.

        :rtype: :class:`twisted.internet.defer.Deferred` firing with the
            command output.
        """
        raise NotImplementedError()

    # (record key, attribute) pairs kept in the raw driver state.
    _fields = (
        ("ip-address", "ip_address"),
        ("ssh-user", "ssh_user"),
        ("ssh-port", "ssh_port"),
        ("ssh-key-path", "ssh_key_path"),
        ("store-path", "store_path"),
        )

    def get_serialization_data(self):
        data = {
            "driver-name": self.driver_name(),
            "machine-name": self.machine_name}
        for key, attr in self._fields:
            data[key] = getattr(self, attr)
        return data

    @classmethod
    def from_data(cls, machine_name, data):
        """Restore a driver from its raw state.

        Keys absent from `data` keep the driver class defaults.
        """
        kw = dict((attr, data[key]) for key, attr in cls._fields
                  if key in data)
        return cls(
            data.get("machine-name") or machine_name,
            name=data.get("driver-name"), **kw)

    def __repr__(self):
        return "<%s %s %r>" % (
            self.__class__.__name__, self.driver_name(), self.machine_name)

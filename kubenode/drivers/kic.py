from twisted.internet.defer import inlineCallbacks

from kubenode.drivers.base import Driver, run
from kubenode.errors import DriverError

# Every attached network, comma terminated.
_INSPECT_FORMAT = "{{range .NetworkSettings.Networks}}{{.IPAddress}},{{end}}"


class KICDriver(Driver):
    """Kubernetes in a container, run by docker or podman.

    The driver name doubles as the container runtime binary.
    """

    default_name = "docker"

    def __init__(self, machine_name, name=None, ssh_user="docker", **kw):
        super(KICDriver, self).__init__(
            machine_name, name=name, ssh_user=ssh_user, **kw)

    @inlineCallbacks
    def get_ip(self):
        output = yield run([
            self.driver_name(), "container", "inspect",
            "-f", _INSPECT_FORMAT, self.machine_name])
        addresses = [a.strip() for a in output.split(",") if a.strip()]
        if not addresses:
            raise DriverError(
                "Container %r has no IP address" % self.machine_name, output)
        self.ip_address = addresses[0]
        return self.ip_address

    def run_command(self, command):
        return run([
            self.driver_name(), "exec", "--privileged", self.machine_name,
            "/bin/bash", "-c", command])

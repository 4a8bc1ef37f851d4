from twisted.internet.defer import inlineCallbacks

from kubenode.drivers.base import Driver, run
from kubenode.errors import DriverError


class NoneDriver(Driver):
    """Bare-metal driver: the node is the host kubenode runs on."""

    default_name = "none"

    @inlineCallbacks
    def get_ip(self):
        output = yield run(["hostname", "-I"])
        addresses = output.split()
        if not addresses:
            raise DriverError("Host has no IP address", output)
        self.ip_address = addresses[0]
        return self.ip_address

    def run_command(self, command):
        return run(["/bin/bash", "-c", command])

import logging

from twisted.internet.defer import fail, succeed

from kubenode.drivers.base import Driver
from kubenode.errors import DriverError

log = logging.getLogger("kubenode.drivers")


class MockDriver(Driver):
    """In memory driver, for tests and dry runs.

    Commands are recorded instead of executed; `responses` maps a
    command to the output it should produce.
    """

    default_name = "mock"

    def __init__(self, machine_name, name=None, ip_address="127.0.0.1",
                 **kw):
        super(MockDriver, self).__init__(
            machine_name, name=name, ip_address=ip_address, **kw)
        self.commands = []
        self.responses = {}

    def get_ip(self):
        if not self.ip_address:
            return fail(DriverError("Mock machine has no IP address"))
        return succeed(self.ip_address)

    def run_command(self, command):
        self.commands.append(command)
        log.debug("Mock command on %r: %s", self.machine_name, command)
        response = self.responses.get(command, "")
        if isinstance(response, Exception):
            return fail(response)
        return succeed(response)

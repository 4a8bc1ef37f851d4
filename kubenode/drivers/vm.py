from twisted.internet.defer import fail, succeed

from kubenode.drivers.base import Driver, run
from kubenode.errors import DriverError


class VMDriver(Driver):
    """Virtual machine driven by a hypervisor plugin.

    The hypervisor plugin records the address it leased to the machine
    in the driver state; commands are run over ssh.
    """

    default_name = "virtualbox"

    def get_ip(self):
        if not self.ip_address:
            return fail(DriverError(
                "IP address is not set for %r" % self.machine_name))
        return succeed(self.ip_address)

    def get_ssh_args(self):
        args = ["ssh",
                "-o", "StrictHostKeyChecking=no",
                "-o", "UserKnownHostsFile=/dev/null",
                "-o", "LogLevel=quiet",
                "-p", str(self.ssh_port)]
        if self.ssh_key_path:
            args.extend(["-i", self.ssh_key_path])
        args.append("%s@%s" % (self.ssh_user, self.ip_address))
        return args

    def run_command(self, command):
        if not self.ip_address:
            return fail(DriverError(
                "Cannot reach %r, IP address is not set" % (
                    self.machine_name,)))
        return run(self.get_ssh_args() + [command])

"""Provisioners for stock distributions, chosen by probing the node.

Bare-metal nodes run whatever operating system their owner installed,
so the provisioner is picked by reading ``/etc/os-release`` from the
live node and asking each registered provisioner whether it supports
what it finds.
"""
import logging
import shlex

from twisted.internet.defer import inlineCallbacks

from kubenode.errors import NoProvisionerDetected
from kubenode.provision.base import Provisioner

log = logging.getLogger("kubenode.provision")

OS_RELEASE_COMMAND = "cat /etc/os-release"


class OsRelease(object):
    """The fields of an os-release(5) file relevant to provisioning."""

    def __init__(self, id="", id_like="", version_id="", name="",
                 pretty_name=""):
        self.id = id
        self.id_like = id_like
        self.version_id = version_id
        self.name = name
        self.pretty_name = pretty_name

    def __repr__(self):
        return "<OsRelease %s %s>" % (self.id, self.version_id)


def parse_os_release(content):
    """Parse the content of an os-release(5) file.

    Unknown keys, comments and malformed lines are ignored.
    """
    values = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        try:
            parts = shlex.split(value)
        except ValueError:
            continue
        values[key.strip()] = " ".join(parts)
    return OsRelease(
        id=values.get("ID", "").lower(),
        id_like=values.get("ID_LIKE", "").lower(),
        version_id=values.get("VERSION_ID", ""),
        name=values.get("NAME", ""),
        pretty_name=values.get("PRETTY_NAME", ""))


class SystemdProvisioner(Provisioner):
    """Layers a drop-in over the distribution's packaged docker unit."""

    os_ids = ()

    def compatible_with_host(self, os_release):
        return os_release.id in self.os_ids


class UbuntuSystemdProvisioner(SystemdProvisioner):

    os_ids = ("ubuntu",)


class DebianProvisioner(SystemdProvisioner):

    os_ids = ("debian", "raspbian")


class RedHatProvisioner(SystemdProvisioner):

    os_ids = ("rhel", "centos", "fedora", "rocky", "almalinux")


PROVISIONERS = [
    UbuntuSystemdProvisioner,
    DebianProvisioner,
    RedHatProvisioner,
    ]


def register_provisioner(provisioner_class):
    """Make a provisioner class available to :func:`detect_provisioner`.

    Classes are consulted in registration order.
    """
    if provisioner_class not in PROVISIONERS:
        PROVISIONERS.append(provisioner_class)
    return provisioner_class


@inlineCallbacks
def detect_provisioner(driver):
    """Find the provisioner matching the operating system of a live node.

    :return: a provisioner bound to `driver`
    :rtype: :class:`twisted.internet.defer.Deferred`

    :raises: :exc:`kubenode.errors.NoProvisionerDetected`
    """
    content = yield driver.run_command(OS_RELEASE_COMMAND)
    os_release = parse_os_release(content)
    log.debug("Detected operating system %r on %r",
              os_release.pretty_name or os_release.id, driver.machine_name)
    for provisioner_class in PROVISIONERS:
        provisioner = provisioner_class(driver)
        if provisioner.compatible_with_host(os_release):
            return provisioner
    raise NoProvisionerDetected(os_release)

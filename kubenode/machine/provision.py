import logging
import time

from twisted.internet.defer import inlineCallbacks, succeed

from kubenode import drivers
from kubenode.errors import ProvisionerDetectionError
from kubenode.provision import generic
from kubenode.provision.buildroot import BuildrootProvisioner
from kubenode.provision.ubuntu import UbuntuProvisioner

log = logging.getLogger("kubenode.machine")


def fast_detect_provisioner(host):
    """Pick the provisioner for a host without probing it where possible.

    Container nodes always run the KIC Ubuntu image and VM nodes always
    run the buildroot image, so only bare-metal nodes need detection.
    The container check runs first.

    :rtype: :class:`twisted.internet.defer.Deferred`
    """
    name = host.driver.driver_name()
    if drivers.is_kic(name):
        return succeed(UbuntuProvisioner(host.driver))
    elif drivers.is_bare_metal(name):
        return generic.detect_provisioner(host.driver)
    if not drivers.is_vm(name):
        log.debug("Unknown driver %r, assuming a buildroot VM", name)
    return succeed(BuildrootProvisioner(host.driver))


@inlineCallbacks
def provision_docker_machine(host):
    """Provision the container engine of a machine.

    The caller is responsible for checking the machine is valid.
    """
    log.info("provisioning docker machine ...")
    start = time.time()
    try:
        try:
            provisioner = yield fast_detect_provisioner(host)
        except Exception as e:
            raise ProvisionerDetectionError(e)
        options = host.host_options
        yield provisioner.provision(
            options.swarm_options,
            options.auth_options,
            options.engine_options)
    finally:
        log.info("provisioned docker machine in %.3fs",
                 time.time() - start)

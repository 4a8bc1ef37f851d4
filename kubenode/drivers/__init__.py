"""Driver names and their classification.

Drivers fall into three classes: container drivers (Kubernetes in a
container, "KIC"), unisolated bare-metal drivers, and virtual machine
drivers. Everything that is neither KIC nor bare metal is treated as a
virtual machine.
"""
import yaml

from kubenode.drivers.kic import KICDriver
from kubenode.drivers.mock import MockDriver
from kubenode.drivers.none import NoneDriver
from kubenode.drivers.vm import VMDriver
from kubenode.errors import DriverError

DOCKER = "docker"
PODMAN = "podman"
NONE = "none"
MOCK = "mock"
VIRTUALBOX = "virtualbox"
KVM2 = "kvm2"
HYPERKIT = "hyperkit"
HYPERV = "hyperv"
VMWARE = "vmware"
PARALLELS = "parallels"
QEMU2 = "qemu2"
VFKIT = "vfkit"

KIC_DRIVERS = (DOCKER, PODMAN)
BARE_METAL_DRIVERS = (NONE, MOCK)
VM_DRIVERS = (
    VIRTUALBOX, KVM2, HYPERKIT, HYPERV, VMWARE, PARALLELS, QEMU2, VFKIT)


def is_kic(name):
    """Whether the driver runs Kubernetes in a container."""
    return name in KIC_DRIVERS


def is_bare_metal(name):
    """Whether the driver is unisolated, running on the host itself."""
    return name in BARE_METAL_DRIVERS


def is_mock(name):
    return name == MOCK


def is_vm(name):
    return not (is_kic(name) or is_bare_metal(name))


def supported_drivers():
    return sorted(KIC_DRIVERS + BARE_METAL_DRIVERS + VM_DRIVERS)


def get_driver_class(name):
    if name not in supported_drivers():
        raise DriverError("Unsupported driver: %r" % (name,))
    if is_kic(name):
        return KICDriver
    elif name == NONE:
        return NoneDriver
    elif is_mock(name):
        return MockDriver
    return VMDriver


def driver_from_raw(name, machine_name, raw_driver):
    """Restore a driver from its serialized state.

    :param str name: driver name recorded with the host.
    :param str machine_name: name of the host, used when the state
        doesn't record one.
    :param str raw_driver: YAML text as produced by :func:`serialize`.
    """
    try:
        data = yaml.safe_load(raw_driver)
    except yaml.YAMLError as e:
        raise DriverError("Invalid driver state for %r: %s" % (
            machine_name, e))
    if not isinstance(data, dict):
        raise DriverError("Invalid driver state for %r" % (machine_name,))
    data.setdefault("driver-name", name)
    driver_class = get_driver_class(data["driver-name"])
    return driver_class.from_data(machine_name, data)


def serialize(driver):
    return yaml.safe_dump(driver.get_serialization_data(),
                          default_flow_style=False)

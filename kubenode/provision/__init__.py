from kubenode.provision.base import Provisioner
from kubenode.provision.buildroot import BuildrootProvisioner
from kubenode.provision.generic import (
    DebianProvisioner, RedHatProvisioner, UbuntuSystemdProvisioner,
    detect_provisioner, parse_os_release, register_provisioner)
from kubenode.provision.ubuntu import UbuntuProvisioner

__all__ = [
    "BuildrootProvisioner",
    "DebianProvisioner",
    "Provisioner",
    "RedHatProvisioner",
    "UbuntuProvisioner",
    "UbuntuSystemdProvisioner",
    "detect_provisioner",
    "parse_os_release",
    "register_provisioner",
    ]

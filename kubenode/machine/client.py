"""Management client for host records kept on local disk."""
import io
import logging
import os

import yaml
from twisted.internet.defer import inlineCallbacks

from kubenode import drivers
from kubenode.cluster.config import get_home
from kubenode.errors import FileNotFound, MachineClientError
from kubenode.host import Host, HostOptions
from kubenode.lib.files import FileStorage

log = logging.getLogger("kubenode.machine.client")

_RECORD_FILE = "config.yaml"


def _record_path(name):
    return "%s/%s" % (name, _RECORD_FILE)


class LocalClient(object):
    """Loads and saves host records in a :class:`FileStorage`.

    Each machine gets its own directory, holding a YAML record with the
    machine name, the driver name, the serialized driver state and the
    host options.
    """

    def __init__(self, storage):
        self._storage = storage

    @property
    def storage(self):
        return self._storage

    @inlineCallbacks
    def load(self, name):
        """Load the record of machine `name`.

        :return: a :class:`kubenode.host.Host`, or None when there is no
            record for `name`.
        :rtype: :class:`twisted.internet.defer.Deferred`

        :raises: :exc:`kubenode.errors.MachineClientError` if the record
            can't be parsed or belongs to another machine.
        """
        try:
            record_file = yield self._storage.get(_record_path(name))
        except FileNotFound:
            return None
        with record_file:
            content = record_file.read()
        return self._deserialize(name, content)

    def _deserialize(self, name, content):
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise MachineClientError(
                "Invalid machine record for %r: %s" % (name, e))
        if not isinstance(data, dict):
            raise MachineClientError(
                "Invalid machine record for %r" % (name,))

        record_name = data.get("name")
        if record_name is None:
            record_name = name
        elif record_name and record_name != name:
            raise MachineClientError(
                "Machine record for %r names machine %r" % (
                    name, record_name))

        driver_name = data.get("driver-name")
        raw_driver = data.get("raw-driver")
        driver = None
        if raw_driver is not None:
            driver = drivers.driver_from_raw(driver_name, name, raw_driver)

        host_options = None
        if data.get("host-options") is not None:
            host_options = HostOptions.from_dict(data["host-options"])

        return Host(
            record_name, driver, host_options, raw_driver,
            driver_name=driver_name)

    def save(self, host):
        """Write the record of `host`, replacing any previous one.

        The driver state is serialized afresh, so changes the driver
        picked up since loading are kept.
        """
        if host.driver is not None:
            host.raw_driver = drivers.serialize(host.driver)
        data = {
            "name": host.name,
            "driver-name": host.driver_name,
            "raw-driver": host.raw_driver}
        if host.host_options is not None:
            data["host-options"] = host.host_options.get_serialization_data()
        log.debug("Saving machine record %r", host.name)
        content = yaml.safe_dump(data, default_flow_style=False)
        return self._storage.put(
            _record_path(host.name), io.BytesIO(content.encode("utf-8")))


def new_api_client(home=None):
    """Create a :class:`LocalClient` rooted in the kubenode home.

    :raises: :exc:`kubenode.errors.MachineClientError` if the machine
        store can't be created.
    """
    path = os.path.join(get_home(home), "machines")
    if not os.path.isdir(path):
        try:
            os.makedirs(path)
        except OSError as e:
            raise MachineClientError(
                "Unable to create machine store %s: %s" % (path, e))
    return LocalClient(FileStorage(path))

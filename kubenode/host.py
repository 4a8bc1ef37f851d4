"""Host records, as persisted in the machine store.

A host record describes one machine: its name, the driver controlling it,
the opaque serialized state of that driver, and the options bundles
(swarm, auth, engine) handed to a provisioner.
"""
import copy


class _Options(object):
    """Option bundle with a dict round trip.

    Subclasses list their fields as ``(attribute, key, default)``;
    ``key`` is the hyphenated name used in serialized records.
    """

    fields = ()

    def __init__(self, **kw):
        for attr, key, default in self.fields:
            setattr(self, attr, kw.pop(attr, copy.deepcopy(default)))
        if kw:
            raise TypeError("Unknown %s options: %s" % (
                self.__class__.__name__, ", ".join(sorted(kw))))

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        return cls(**dict(
            (attr, data[key]) for attr, key, _ in cls.fields if key in data))

    def get_serialization_data(self):
        return dict(
            (key, copy.deepcopy(getattr(self, attr)))
            for attr, key, _ in self.fields)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented
        return (self.get_serialization_data() ==
                other.get_serialization_data())

    def __repr__(self):
        return "<%s %r>" % (
            self.__class__.__name__, self.get_serialization_data())


class SwarmOptions(_Options):

    fields = (
        ("is_swarm", "is-swarm", False),
        ("master", "master", False),
        ("address", "address", ""),
        ("discovery", "discovery", ""),
        ("host", "host", "tcp://0.0.0.0:3376"),
        ("strategy", "strategy", "spread"),
        )


class AuthOptions(_Options):
    """Where TLS material lives, locally and on the node.

    Only paths are carried; the material itself is managed elsewhere.
    """

    fields = (
        ("certificate_dir", "certificate-dir", ""),
        ("ca_cert_path", "ca-cert-path", ""),
        ("server_cert_path", "server-cert-path", ""),
        ("server_key_path", "server-key-path", ""),
        ("ca_cert_remote_path", "ca-cert-remote-path",
         "/etc/docker/ca.pem"),
        ("server_cert_remote_path", "server-cert-remote-path",
         "/etc/docker/server.pem"),
        ("server_key_remote_path", "server-key-remote-path",
         "/etc/docker/server-key.pem"),
        ("store_path", "store-path", ""),
        )


class EngineOptions(_Options):

    fields = (
        ("storage_driver", "storage-driver", ""),
        ("labels", "labels", []),
        ("insecure_registry", "insecure-registry", []),
        ("registry_mirror", "registry-mirror", []),
        ("arbitrary_flags", "arbitrary-flags", []),
        ("env", "env", []),
        ("tls_verify", "tls-verify", True),
        ("install_url", "install-url", "https://get.docker.com"),
        )


class HostOptions(object):

    def __init__(self, swarm_options=None, auth_options=None,
                 engine_options=None):
        self.swarm_options = swarm_options or SwarmOptions()
        self.auth_options = auth_options or AuthOptions()
        self.engine_options = engine_options or EngineOptions()

    @classmethod
    def from_dict(cls, data):
        return cls(
            SwarmOptions.from_dict(data.get("swarm")),
            AuthOptions.from_dict(data.get("auth")),
            EngineOptions.from_dict(data.get("engine")))

    def get_serialization_data(self):
        return {
            "swarm": self.swarm_options.get_serialization_data(),
            "auth": self.auth_options.get_serialization_data(),
            "engine": self.engine_options.get_serialization_data()}


class Host(object):
    """A persisted machine description.

    :param str name: machine name, unique within the machine store.
    :param driver: :class:`kubenode.drivers.base.Driver` controlling the
        machine, or None if the driver state could not be restored.
    :param host_options: :class:`HostOptions` or None.
    :param str raw_driver: serialized driver state, as stored.
    :param str driver_name: name of the driver as recorded; defaults to
        the driver's own name.
    """

    def __init__(self, name, driver=None, host_options=None,
                 raw_driver=None, driver_name=None):
        self.name = name
        self.driver = driver
        self.host_options = host_options
        self.raw_driver = raw_driver
        self._driver_name = driver_name

    @property
    def driver_name(self):
        if self.driver is not None:
            return self.driver.driver_name()
        return self._driver_name

    def __repr__(self):
        return "<Host %r driver=%r>" % (self.name, self.driver_name)

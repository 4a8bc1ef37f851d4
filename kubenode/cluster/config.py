import io
import logging
import os

import yaml
from twisted.internet.defer import inlineCallbacks

from kubenode.errors import ClusterConfigError, FileNotFound
from kubenode.lib.files import FileStorage

log = logging.getLogger("kubenode.cluster")

DEFAULT_HOME = "~/.kubenode"
DEFAULT_PROFILE = "kubenode"

_CONFIG_FILE = "config.yaml"


def get_home(home=None):
    """Return the kubenode home directory.

    Defaults to $KUBENODE_HOME, or ~/.kubenode.
    """
    if home is None:
        home = os.environ.get("KUBENODE_HOME") or DEFAULT_HOME
    return os.path.abspath(os.path.expanduser(home))


def get_default_profile():
    return os.environ.get("KUBENODE_PROFILE") or DEFAULT_PROFILE


class Node(object):
    """A machine of the cluster, and the address it was reached at."""

    def __init__(self, name="", ip="", port=8443, control_plane=True,
                 worker=True):
        self.name = name
        self.ip = ip
        self.port = port
        self.control_plane = control_plane
        self.worker = worker

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=data.get("name", ""),
            ip=data.get("ip", ""),
            port=data.get("port", 8443),
            control_plane=data.get("control-plane", True),
            worker=data.get("worker", True))

    def get_serialization_data(self):
        return {
            "name": self.name,
            "ip": self.ip,
            "port": self.port,
            "control-plane": self.control_plane,
            "worker": self.worker}

    def __repr__(self):
        return "<Node %r ip=%r>" % (self.name, self.ip)


class ClusterConfig(object):

    def __init__(self, name, driver="", nodes=None, kubernetes_version=""):
        self.name = name
        self.driver = driver
        self.nodes = list(nodes or [])
        self.kubernetes_version = kubernetes_version

    @classmethod
    def from_dict(cls, data):
        return cls(
            data["name"],
            driver=data.get("driver", ""),
            nodes=[Node.from_dict(n) for n in data.get("nodes") or []],
            kubernetes_version=data.get("kubernetes-version", ""))

    def get_serialization_data(self):
        return {
            "name": self.name,
            "driver": self.driver,
            "kubernetes-version": self.kubernetes_version,
            "nodes": [n.get_serialization_data() for n in self.nodes]}

    def get_node(self, name):
        for node in self.nodes:
            if node.name == name:
                return node
        raise ClusterConfigError(
            "Cluster %r has no node %r" % (self.name, name))

    def primary_control_plane(self):
        for node in self.nodes:
            if node.control_plane:
                return node
        raise ClusterConfigError(
            "Cluster %r has no control plane node" % (self.name,))


def machine_name(cluster_config, node):
    """Name of the machine backing `node`.

    The machine of the primary control plane is named after the cluster,
    the others after the cluster and the node.
    """
    if (not node.name or
        (node.control_plane and
         node.name == cluster_config.primary_control_plane().name)):
        return cluster_config.name
    return "%s-%s" % (cluster_config.name, node.name)


def _profile_path(profile):
    return "%s/%s" % (profile, _CONFIG_FILE)


class ClusterConfigStore(object):
    """Cluster configurations, one per profile, kept as YAML files."""

    def __init__(self, storage):
        self._storage = storage

    @inlineCallbacks
    def load(self, profile):
        """Load the cluster configuration of `profile`.

        :raises: :exc:`kubenode.errors.ClusterConfigError` if the profile
            doesn't exist or can't be parsed.
        """
        path = _profile_path(profile)
        try:
            config_file = yield self._storage.get(path)
        except FileNotFound:
            raise ClusterConfigError("Profile %r not found" % (profile,))
        with config_file:
            content = config_file.read()
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            self._fail(e, path)
        if not isinstance(data, dict) or "name" not in data:
            self._fail("Configuration must be a dictionary with a name",
                       path)
        return ClusterConfig.from_dict(data)

    def _fail(self, error, path):
        raise ClusterConfigError(
            "Cluster configuration error: %s: %s" % (
                self._storage.get_url(path), error))

    def save(self, cluster_config):
        data = yaml.safe_dump(
            cluster_config.get_serialization_data(),
            default_flow_style=False)
        return self._storage.put(
            _profile_path(cluster_config.name),
            io.BytesIO(data.encode("utf-8")))

    def save_node(self, cluster_config, node):
        """Store `node` in `cluster_config`, then save the configuration.

        A node with the same name is replaced; otherwise `node` is added.
        """
        for index, existing in enumerate(cluster_config.nodes):
            if existing.name == node.name:
                cluster_config.nodes[index] = node
                break
        else:
            cluster_config.nodes.append(node)
        log.debug("Saving node %r of cluster %r",
                  node.name, cluster_config.name)
        return self.save(cluster_config)


def new_config_store(home=None):
    """Create a :class:`ClusterConfigStore` rooted in the kubenode home."""
    path = os.path.join(get_home(home), "profiles")
    if not os.path.isdir(path):
        try:
            os.makedirs(path)
        except OSError as e:
            raise ClusterConfigError(
                "Unable to create profile store %s: %s" % (path, e))
    return ClusterConfigStore(FileStorage(path))

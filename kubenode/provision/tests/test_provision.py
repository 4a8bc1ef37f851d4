import shlex

from twisted.internet.defer import inlineCallbacks

from kubenode.drivers.mock import MockDriver
from kubenode.errors import (
    DriverError, NoProvisionerDetected, ProvisionerError)
from kubenode.host import AuthOptions, EngineOptions, SwarmOptions
from kubenode.lib.testing import TestCase
from kubenode.provision import (
    BuildrootProvisioner, DebianProvisioner, Provisioner, RedHatProvisioner,
    UbuntuProvisioner, UbuntuSystemdProvisioner, detect_provisioner,
    parse_os_release, register_provisioner)
from kubenode.provision import generic


UBUNTU_OS_RELEASE = """\
PRETTY_NAME="Ubuntu 22.04.4 LTS"
NAME="Ubuntu"
VERSION_ID="22.04"
VERSION="22.04.4 LTS (Jammy Jellyfish)"
ID=ubuntu
ID_LIKE=debian
"""


class ProvisionerTest(TestCase):

    def setUp(self):
        self.driver = MockDriver("minikube")
        self.provisioner = Provisioner(self.driver)

    def provision(self, engine_options=None, swarm_options=None):
        return self.provisioner.provision(
            swarm_options or SwarmOptions(), AuthOptions(),
            engine_options or EngineOptions())

    @inlineCallbacks
    def test_provision_steps(self):
        yield self.provision()
        self.assertEqual(len(self.driver.commands), 3)
        hostname, write, restart = self.driver.commands
        self.assertEqual(
            hostname,
            "sudo hostname minikube && echo minikube | sudo tee /etc/hostname")
        self.assertIn(self.provisioner.engine_config_path, write)
        self.assertIn("systemctl daemon-reload", restart)
        self.assertIn("systemctl -f restart docker", restart)

    @inlineCallbacks
    def test_written_config_is_quoted(self):
        yield self.provision(EngineOptions(env=["HTTP_PROXY=http://p:3128"]))
        write = self.driver.commands[1]
        words = shlex.split(write)
        self.assertIn(self.provisioner.render_engine_config(), words)

    @inlineCallbacks
    def test_options_are_kept(self):
        swarm = SwarmOptions()
        engine = EngineOptions()
        yield self.provision(engine, swarm)
        self.assertIs(self.provisioner.swarm_options, swarm)
        self.assertIs(self.provisioner.engine_options, engine)

    @inlineCallbacks
    def test_swarm_is_not_applied(self):
        output = self.capture_logging("kubenode.provision")
        yield self.provision(swarm_options=SwarmOptions(is_swarm=True))
        self.assertIn("Swarm options are not applied", output.getvalue())
        self.assertEqual(len(self.driver.commands), 3)

    def test_failed_step(self):
        self.driver.responses[
            "sudo hostname minikube && echo minikube | sudo tee "
            "/etc/hostname"] = DriverError("no sudo", "sudo: not found")
        d = self.assertFailure(self.provision(), ProvisionerError)

        def verify(error):
            self.assertIn("sudo: not found", str(error))
            self.assertEqual(len(self.driver.commands), 1)
        return d.addCallback(verify)

    def test_engine_args(self):
        self.provisioner.auth_options = AuthOptions()
        self.provisioner.engine_options = EngineOptions(
            storage_driver="overlay2",
            labels=["provider=kvm2"],
            insecure_registry=["10.96.0.0/12"],
            registry_mirror=["https://mirror.gcr.io"],
            arbitrary_flags=["debug"])
        args = self.provisioner.get_engine_args()
        self.assertEqual(args[:5], [
            "/usr/bin/dockerd", "-H", "tcp://0.0.0.0:2376",
            "-H", "unix:///var/run/docker.sock"])
        for expected in (["--storage-driver", "overlay2"],
                         ["--tlscacert", "/etc/docker/ca.pem"],
                         ["--label", "provider=kvm2"],
                         ["--insecure-registry", "10.96.0.0/12"],
                         ["--registry-mirror", "https://mirror.gcr.io"]):
            index = args.index(expected[0])
            self.assertEqual(args[index:index + 2], expected)
        self.assertIn("--tlsverify", args)
        self.assertEqual(args[-1], "--debug")

    def test_engine_args_without_tls(self):
        self.provisioner.auth_options = AuthOptions()
        self.provisioner.engine_options = EngineOptions(tls_verify=False)
        args = self.provisioner.get_engine_args()
        self.assertNotIn("--tlsverify", args)
        self.assertNotIn("--storage-driver", args)

    def test_render_drop_in(self):
        self.provisioner.auth_options = AuthOptions()
        self.provisioner.engine_options = EngineOptions(
            env=["NO_PROXY=localhost"], tls_verify=False)
        self.assertEqual(
            self.provisioner.render_engine_config(),
            "[Service]\n"
            "Environment=NO_PROXY=localhost\n"
            "ExecStart=\n"
            "ExecStart=/usr/bin/dockerd -H tcp://0.0.0.0:2376 "
            "-H unix:///var/run/docker.sock\n")


class FixedProvisionerTest(TestCase):

    def render(self, provisioner_class):
        provisioner = provisioner_class(MockDriver("minikube"))
        provisioner.auth_options = AuthOptions()
        provisioner.engine_options = EngineOptions()
        return provisioner.render_engine_config()

    def test_ubuntu_unit(self):
        unit = self.render(UbuntuProvisioner)
        self.assertTrue(unit.startswith("[Unit]\n"))
        self.assertIn("BindsTo=containerd.service", unit)
        self.assertIn("--default-ulimit=nofile=1048576:1048576", unit)
        self.assertIn("WantedBy=multi-user.target", unit)
        self.assertEqual(UbuntuProvisioner.engine_config_path,
                         "/lib/systemd/system/docker.service")

    def test_buildroot_unit(self):
        unit = self.render(BuildrootProvisioner)
        self.assertIn("Requires=minikube-automount.service", unit)
        self.assertNotIn("--default-ulimit", unit)
        self.assertIn("ExecStart=\nExecStart=/usr/bin/dockerd", unit)

    @inlineCallbacks
    def test_ubuntu_provision(self):
        driver = MockDriver("minikube")
        yield UbuntuProvisioner(driver).provision(
            SwarmOptions(), AuthOptions(), EngineOptions())
        self.assertIn("/lib/systemd/system/docker.service",
                      driver.commands[1])


class OsReleaseTest(TestCase):

    def test_parse(self):
        os_release = parse_os_release(UBUNTU_OS_RELEASE)
        self.assertEqual(os_release.id, "ubuntu")
        self.assertEqual(os_release.id_like, "debian")
        self.assertEqual(os_release.version_id, "22.04")
        self.assertEqual(os_release.name, "Ubuntu")
        self.assertEqual(os_release.pretty_name, "Ubuntu 22.04.4 LTS")

    def test_parse_junk(self):
        os_release = parse_os_release(
            "# comment\n\nnonsense\nID='centos'\nNAME=\"unterminated\n")
        self.assertEqual(os_release.id, "centos")
        self.assertEqual(os_release.name, "")

    def test_parse_empty(self):
        self.assertEqual(parse_os_release("").id, "")


class DetectProvisionerTest(TestCase):

    def detect(self, content):
        self.driver = MockDriver("minikube")
        self.driver.responses[generic.OS_RELEASE_COMMAND] = content
        return detect_provisioner(self.driver)

    @inlineCallbacks
    def test_detect_ubuntu(self):
        provisioner = yield self.detect(UBUNTU_OS_RELEASE)
        self.assertInstance(provisioner, UbuntuSystemdProvisioner)
        self.assertIs(provisioner.driver, self.driver)
        self.assertEqual(self.driver.commands, ["cat /etc/os-release"])

    @inlineCallbacks
    def test_detect_debian(self):
        provisioner = yield self.detect("ID=raspbian\n")
        self.assertInstance(provisioner, DebianProvisioner)

    @inlineCallbacks
    def test_detect_redhat(self):
        for os_id in ("centos", "fedora", "rhel"):
            provisioner = yield self.detect("ID=%s\n" % os_id)
            self.assertInstance(provisioner, RedHatProvisioner)

    def test_detect_unknown(self):
        d = self.assertFailure(
            self.detect('ID=plan9\nPRETTY_NAME="Plan 9"\n'),
            NoProvisionerDetected)

        def verify(error):
            self.assertEqual(error.os_release.id, "plan9")
            self.assertIn("Plan 9", str(error))
        return d.addCallback(verify)

    def test_os_release_read_failure(self):
        driver = MockDriver("minikube")
        driver.responses[generic.OS_RELEASE_COMMAND] = DriverError("refused")
        return self.assertFailure(detect_provisioner(driver), DriverError)

    def test_fixed_provisioners_are_not_registered(self):
        self.assertNotIn(UbuntuProvisioner, generic.PROVISIONERS)
        self.assertNotIn(BuildrootProvisioner, generic.PROVISIONERS)

    @inlineCallbacks
    def test_register_provisioner(self):
        self.patch(generic, "PROVISIONERS", list(generic.PROVISIONERS))

        @register_provisioner
        class ArchProvisioner(generic.SystemdProvisioner):
            os_ids = ("arch",)

        register_provisioner(ArchProvisioner)
        self.assertEqual(generic.PROVISIONERS.count(ArchProvisioner), 1)
        provisioner = yield self.detect("ID=arch\n")
        self.assertInstance(provisioner, ArchProvisioner)

import io
import os

from twisted.internet.defer import inlineCallbacks

from kubenode.errors import FileNotFound
from kubenode.lib.files import FileStorage
from kubenode.lib.testing import TestCase


class FileStorageTest(TestCase):

    def setUp(self):
        self.path = self.makeDir()
        self.storage = FileStorage(self.path)

    @inlineCallbacks
    def test_put_and_get(self):
        yield self.storage.put("machines/minikube/config.yaml",
                               io.BytesIO(b"name: minikube\n"))
        self.assertTrue(os.path.isfile(
            os.path.join(self.path, "machines", "minikube", "config.yaml")))
        f = yield self.storage.get("machines/minikube/config.yaml")
        with f:
            self.assertEqual(f.read(), b"name: minikube\n")

    @inlineCallbacks
    def test_put_replaces(self):
        yield self.storage.put("record", io.BytesIO(b"old"))
        yield self.storage.put("record", io.BytesIO(b"new"))
        f = yield self.storage.get("record")
        with f:
            self.assertEqual(f.read(), b"new")
        self.assertEqual(os.listdir(self.path), ["record"])

    def test_get_missing(self):
        d = self.assertFailure(self.storage.get("missing"), FileNotFound)

        def verify(error):
            self.assertEqual(error.path, os.path.join(self.path, "missing"))
        return d.addCallback(verify)

    def test_put_outside_storage(self):
        return self.assertFailure(
            self.storage.put("../escape", io.BytesIO(b"")), AssertionError)

    def test_get_outside_storage(self):
        secret = os.path.join(os.path.dirname(self.path), "secret")
        with open(secret, "w") as f:
            f.write("name: stolen\n")
        return self.assertFailure(
            self.storage.get("../secret"), AssertionError)

    def test_get_storage_root(self):
        return self.assertFailure(self.storage.get("a/.."), AssertionError)

    def test_get_url_outside_storage(self):
        self.assertRaises(AssertionError, self.storage.get_url, "../../etc")

    def test_get_url(self):
        self.assertEqual(self.storage.get_url("a/b"),
                         "file://%s/a/b" % self.path)

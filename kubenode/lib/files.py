"""
Directory based file storage for machine records and cluster profiles.
"""

import os

from twisted.internet.defer import fail, succeed

from kubenode.errors import FileNotFound


class FileStorage(object):

    def __init__(self, path):
        self._path = os.path.abspath(path)

    @property
    def path(self):
        return self._path

    def _resolve(self, name):
        path = os.path.abspath(os.path.join(
            self._path, *[part for part in name.split("/") if part]))
        if not path.startswith(self._path + os.sep):
            raise AssertionError("Invalid Remote Path %s" % name)
        return path

    def get(self, name):
        try:
            file_path = self._resolve(name)
        except AssertionError:
            return fail()
        if os.path.isfile(file_path):
            return succeed(open(file_path, "rb"))
        return fail(FileNotFound(file_path))

    def put(self, remote_path, file_object):
        try:
            store_path = self._resolve(remote_path)
        except AssertionError:
            return fail()

        parent_store_path = os.path.dirname(store_path)
        if not os.path.exists(parent_store_path):
            os.makedirs(parent_store_path)
        # Readers never see a half written record.
        partial_path = store_path + ".partial"
        with open(partial_path, "wb") as f:
            f.write(file_object.read())
        os.replace(partial_path, store_path)
        return succeed(True)

    def get_url(self, name):
        return "file://%s" % self._resolve(name)

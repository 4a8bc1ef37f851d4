import io
import logging
import os
import sys

from twisted.trial.unittest import TestCase as TrialTestCase


class TestCase(TrialTestCase):
    """
    Base class for all kubenode tests.
    """

    # Default timeout for any test
    timeout = 5

    def capture_stream(self, stream_name):
        original = getattr(sys, stream_name)
        new = io.StringIO()

        @self.addCleanup
        def reset_stream():
            setattr(sys, stream_name, original)

        setattr(sys, stream_name, new)
        return new

    def capture_logging(self, name="", level=logging.INFO,
                        log_file=None, formatter=None):
        if log_file is None:
            log_file = io.StringIO()
        log_handler = logging.StreamHandler(log_file)
        if formatter:
            log_handler.setFormatter(formatter)
        logger = logging.getLogger(name)
        logger.addHandler(log_handler)
        old_logger_level = logger.level
        logger.setLevel(level)

        @self.addCleanup
        def reset_logging():
            logger.removeHandler(log_handler)
            logger.setLevel(old_logger_level)

        return log_file

    def change_environment(self, **kw):
        """Reset the environment to kwargs. The tests runtime
        environment will be initialized with only those values passed
        as kwargs, plus HOME.

        The original state of the environment will be restored after
        the tests complete.
        """
        kw.setdefault("HOME", os.environ.get("HOME", ""))

        original_environ = dict(os.environ)

        @self.addCleanup
        def cleanup_env():
            os.environ.clear()
            os.environ.update(original_environ)

        os.environ.clear()
        os.environ.update(kw)

    def makeDir(self):
        path = os.path.abspath(self.mktemp())
        os.makedirs(path)
        return path

    def makeFile(self, content=""):
        path = os.path.abspath(self.mktemp())
        parent = os.path.dirname(path)
        if not os.path.exists(parent):
            os.makedirs(parent)
        with open(path, "w") as f:
            f.write(content)
        return path

    def assertInstance(self, instance, type):
        self.assertTrue(isinstance(instance, type))

    def assertLogLines(self, observed, expected):
        """Asserts that the lines of `expected` exist in order in the log."""
        remaining = list(expected)
        for line in observed.split("\n"):
            if remaining and remaining[0] in line:
                remaining.pop(0)

        self.assertFalse(
            remaining,
            "Did not see all expected lines in log, in order: %s, %s" % (
                observed, expected))

import logging
import unittest

from tetracube.utils.logger import configure_logging, get_logger


class LoggerTests(unittest.TestCase):
    def setUp(self) -> None:
        root = logging.getLogger()
        self._saved = (list(root.handlers), root.level)

    def tearDown(self) -> None:
        root = logging.getLogger()
        root.handlers[:] = self._saved[0]
        root.setLevel(self._saved[1])

    def test_default_logger_is_the_package_namespace(self) -> None:
        self.assertEqual(get_logger().name, "tetracube")

    def test_configure_replaces_handlers_and_sets_level(self) -> None:
        configure_logging(logging.WARNING)
        configure_logging(logging.DEBUG)
        root = logging.getLogger()
        self.assertEqual(len(root.handlers), 1)
        self.assertEqual(root.level, logging.DEBUG)
        self.assertIn("%(name)s", root.handlers[0].formatter._fmt)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

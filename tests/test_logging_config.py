import contextlib
import io
import logging
import os
import tempfile
import unittest

from glyphtrace.logging_config import setup_logging


class SetupLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        self._close_handlers()

    def _close_handlers(self) -> None:
        logger = logging.getLogger("glyphtrace")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_repeated_setup_keeps_one_handler(self) -> None:
        setup_logging(logging.INFO)
        logger = setup_logging(logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_records_go_to_stderr(self) -> None:
        stderr = io.StringIO()
        stdout = io.StringIO()
        with contextlib.redirect_stderr(stderr), contextlib.redirect_stdout(stdout):
            setup_logging(logging.INFO)
            logging.getLogger("glyphtrace.engine").info("frame done")
        self.assertIn("glyphtrace.engine: frame done", stderr.getvalue())
        self.assertEqual(stdout.getvalue(), "")

    def test_log_file_receives_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "run.log")
            with contextlib.redirect_stderr(io.StringIO()):
                logger = setup_logging(logging.WARNING, path)
                logging.getLogger("glyphtrace.ply").warning("bad face")
            self.assertEqual(len(logger.handlers), 2)
            self._close_handlers()
            with open(path, encoding="utf-8") as handle:
                self.assertIn("bad face", handle.read())


if __name__ == "__main__":
    unittest.main()

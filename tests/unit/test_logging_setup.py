import json
import logging
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from discriminord_core.logging_setup import LOG_DIR_ENV, JsonFormatter, configure_logging, get_logger, log_dir


class LoggingSetupTests(unittest.TestCase):
    def test_json_formatter_fields(self):
        record = logging.LogRecord("discriminord.convert", logging.INFO, __file__, 1, "done %s", ("x",), None)
        record.event = "conversion_finished"
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["logger"], "discriminord.convert")
        self.assertEqual(payload["msg"], "done x")
        self.assertEqual(payload["event"], "conversion_finished")
        self.assertIn("ts_utc", payload)

    def test_json_formatter_without_event(self):
        record = logging.LogRecord("discriminord", logging.WARNING, __file__, 1, "plain", (), None)
        payload = json.loads(JsonFormatter().format(record))
        self.assertIsNone(payload["event"])
        self.assertNotIn("exc", payload)

    def test_configure_logging_writes_json_lines_once(self):
        logger = logging.getLogger("discriminord")
        saved_handlers = list(logger.handlers)
        saved_level = logger.level
        logger.handlers.clear()
        try:
            with tempfile.TemporaryDirectory() as tmp:
                with patch.dict(os.environ, {LOG_DIR_ENV: tmp}):
                    first = configure_logging(keep_files=3)
                    second = configure_logging(keep_files=3)
                    self.assertIs(first, second)
                    self.assertEqual(len(first.handlers), 1)
                    get_logger("convert").info("converted", extra={"event": "conversion_finished"})
                    for handler in first.handlers:
                        handler.flush()
                    lines = (Path(tmp) / "discriminord.log").read_text(encoding="utf-8").splitlines()
                    for handler in first.handlers:
                        handler.close()
            self.assertEqual(len(lines), 1)
            self.assertEqual(json.loads(lines[0])["event"], "conversion_finished")
        finally:
            logger.handlers[:] = saved_handlers
            logger.setLevel(saved_level)

    def test_log_dir_override(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "logs"
            with patch.dict(os.environ, {LOG_DIR_ENV: str(target)}):
                self.assertEqual(log_dir(), target)
            self.assertTrue(target.is_dir())

    def test_child_logger_names(self):
        self.assertEqual(get_logger().name, "discriminord")
        self.assertEqual(get_logger("cli").name, "discriminord.cli")


if __name__ == "__main__":
    unittest.main()

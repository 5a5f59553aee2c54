import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import main


class CliTests(unittest.TestCase):
    def test_budget_exhaustion_exits_nonzero_and_writes_payload(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "run.json"
            code = main.main([
                "--side", "4",
                "--batch-size", "100",
                "--seed", "7",
                "--max-steps", "3",
                "--log-level", "WARNING",
                "--quiet",
                "--output", str(output),
            ])
            self.assertEqual(code, 1)
            payload = json.loads(output.read_text(encoding="utf-8"))

        self.assertFalse(payload["complete"])
        self.assertEqual(payload["config"]["seed"], 7)
        self.assertEqual(payload["steps"], 3)
        self.assertEqual(len(payload["grid"]), 4)
        for piece in payload["pieces"]:
            self.assertEqual(len(piece["cells"]), 4)
            self.assertEqual(len(piece["rotation"]), 3)

    def test_invalid_side_is_a_usage_error(self) -> None:
        with self.assertRaises(SystemExit):
            main.main(["--side", "3", "--quiet"])

    def test_side_without_room_for_a_piece_is_a_usage_error(self) -> None:
        with self.assertRaises(SystemExit):
            main.main(["--side", "2", "--quiet", "--max-steps", "1"])

    def test_stats_are_printed_unless_quiet(self) -> None:
        stream = io.StringIO()
        with redirect_stdout(stream):
            code = main.main([
                "--side", "4",
                "--batch-size", "100",
                "--seed", "7",
                "--max-steps", "2",
                "--log-level", "WARNING",
            ])
        self.assertEqual(code, 1)
        text = stream.getvalue()
        self.assertIn("layer 0", text)
        self.assertIn("layer 3", text)
        self.assertIn("Complete:      no", text)
        self.assertIn("Seed: 7", text)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "quotes"))

from quotewall_app.cli import build_parser


class CliTests(unittest.TestCase):
    def test_quotes_list_command(self):
        args = build_parser().parse_args(["quotes", "list", "--search", "love", "--limit", "3"])
        self.assertEqual(args.command, "quotes")
        self.assertEqual(args.quotes_cmd, "list")
        self.assertEqual(args.search, "love")
        self.assertEqual(args.limit, 3)

    def test_compose_command(self):
        args = build_parser().parse_args(
            ["compose", "--quote-id", "q-001", "--size", "square", "--weight", "bold", "--out", "out.png"]
        )
        self.assertEqual(args.command, "compose")
        self.assertEqual(args.quote_id, "q-001")
        self.assertEqual(args.size, "square")
        self.assertEqual(args.weight, "bold")
        self.assertFalse(args.ai_background)

    def test_compose_background_sources_exclusive(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args(["compose", "--background", "a.png", "--ai-background", "--out", "x.png"])

    def test_api_key_commands(self):
        args = build_parser().parse_args(["api-key", "set", "sk-123"])
        self.assertEqual(args.api_key_cmd, "set")
        self.assertEqual(args.key, "sk-123")
        args = build_parser().parse_args(["api-key", "status"])
        self.assertEqual(args.api_key_cmd, "status")

    def test_doctor_command(self):
        args = build_parser().parse_args(["doctor"])
        self.assertEqual(args.command, "doctor")


if __name__ == "__main__":
    unittest.main()

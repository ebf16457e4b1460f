import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "quotes"))

from quotewall_core import diagnostics
from quotewall_core.config import AppConfig
from quotewall_core.diagnostics import build_doctor_payload, redact
from quotewall_core.secret_store import OPENAI_API_KEY, SecretStore


class DiagnosticsTests(unittest.TestCase):
    def test_redact_nested(self):
        out = redact({"api_key": "sk", "nested": [{"auth_token": "x", "size": "square"}]})
        self.assertEqual(out["api_key"], "***REDACTED***")
        self.assertEqual(out["nested"][0]["auth_token"], "***REDACTED***")
        self.assertEqual(out["nested"][0]["size"], "square")

    def test_doctor_payload(self):
        with tempfile.TemporaryDirectory() as tmp:
            secrets = SecretStore(Path(tmp) / "secrets.json")
            secrets.set(OPENAI_API_KEY, "sk-test")
            with patch.object(diagnostics, "log_dir", return_value=Path(tmp) / "logs"):
                payload = build_doctor_payload(AppConfig(), secrets=secrets)

        self.assertTrue(payload["openai_api_key_configured"])
        self.assertEqual(payload["config"]["editor"]["size"], "iphone_portrait")
        self.assertIn("medium", payload["fonts"])
        self.assertNotIn("sk-test", str(payload))


if __name__ == "__main__":
    unittest.main()

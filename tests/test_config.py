import unittest

from stationery.config import Settings


class SettingsTest(unittest.TestCase):
    def test_business_tz_modes(self):
        self.assertEqual(Settings(BUSINESS_TZ="UTC", _env_file=None).BUSINESS_TZ, "utc")
        self.assertEqual(Settings(BUSINESS_TZ=" Local ", _env_file=None).BUSINESS_TZ, "local")

    def test_unknown_business_tz_fails_at_load(self):
        for value in ("Nowhere/Atlantis", "../etc/passwd"):
            with self.subTest(value=value):
                with self.assertRaises(ValueError) as ctx:
                    Settings(BUSINESS_TZ=value, _env_file=None)
                self.assertIn("Unknown BUSINESS_TZ", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()

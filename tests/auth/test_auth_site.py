import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock

from bcapi.auth import MemoryTokenStore, SiteHelper, SiteInfo
from bcapi.errors import AuthConfigurationError


class TestSiteHelper(unittest.TestCase):
    def test_site_id_is_current(self) -> None:
        self.assertEqual(SiteHelper().get_site_id(), "current")
        self.assertEqual(SiteHelper(MemoryTokenStore()).get_site_id(), "current")

    def test_root_url_defaults_to_empty(self) -> None:
        self.assertEqual(SiteHelper().get_root_url(), "")
        helper = SiteHelper(root_url="https://example.com/")
        self.assertEqual(helper.get_root_url(), "https://example.com")

    def test_token_lookups_without_store_are_fatal(self) -> None:
        helper = SiteHelper()
        self.assertFalse(helper.has_token_store)
        with self.assertRaises(AuthConfigurationError):
            helper.get_generic_token()
        with self.assertRaises(AuthConfigurationError):
            helper.get_site_token()

    def test_tokens_are_read_by_key(self) -> None:
        store = Mock()
        store.get.side_effect = lambda key: {"genericToken": "g", "siteToken": "s"}[key]
        helper = SiteHelper(store)

        self.assertEqual(helper.get_generic_token(), "g")
        store.get.assert_called_with("genericToken")

        self.assertEqual(helper.get_site_token(), "s")
        store.get.assert_called_with("siteToken")

    def test_set_tokens(self) -> None:
        store = MemoryTokenStore()
        helper = SiteHelper(store)
        helper.set_site_token("s")
        helper.set_generic_token("g")
        self.assertEqual(store.get("siteToken"), "s")
        self.assertEqual(store.get("genericToken"), "g")

    def test_store_without_get_set_is_rejected(self) -> None:
        with self.assertRaises(AuthConfigurationError):
            SiteHelper(object())  # type: ignore[arg-type]

    def test_from_site_info(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            token_file = str(Path(tmp) / "tokens.json")
            info = SiteInfo(root_url="https://example.com", token_file=token_file)
            helper = SiteHelper.from_site_info(info)
            helper.set_site_token("s")

            self.assertTrue(helper.has_token_store)
            self.assertEqual(helper.get_root_url(), "https://example.com")
            self.assertEqual(SiteHelper.from_site_info(info).get_site_token(), "s")

        self.assertFalse(SiteHelper.from_site_info(SiteInfo()).has_token_store)


if __name__ == "__main__":
    unittest.main()

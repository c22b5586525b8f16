import tempfile
import unittest
from pathlib import Path

import yaml

from market_pulse.config import FeedSource
from market_pulse.services.config_store import ConfigStore


class ConfigStoreTest(unittest.TestCase):
    def test_load_creates_default_and_save_round_trip(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config" / "settings.yaml"
            store = ConfigStore(config_path=config_path)

            loaded = store.load()
            self.assertTrue(config_path.exists())
            self.assertEqual(loaded.feed_timeout_seconds, 6.0)
            self.assertEqual(loaded.feeds.market.limit, 100)
            self.assertEqual(loaded.feeds.world.limit, 120)
            self.assertEqual(loaded.feeds.deals.limit, 80)

            updated = loaded.model_copy(update={"feed_timeout_seconds": 4.0})
            store.save(updated)

            reloaded = store.load()
            self.assertEqual(reloaded.feed_timeout_seconds, 4.0)

    def test_source_ids_are_normalized_and_unique(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "settings.yaml"
            store = ConfigStore(config_path=config_path)
            config = store.load()
            deals = config.feeds.deals.model_copy(
                update={
                    "sources": [
                        FeedSource(name="My Deals!", url="https://a.test/rss"),
                        FeedSource(name="my deals", url="https://b.test/rss"),
                    ]
                }
            )
            feeds = config.feeds.model_copy(update={"deals": deals})
            saved = store.save(config.model_copy(update={"feeds": feeds}))

            ids = [source.source_id for source in saved.feeds.deals.sources]
            self.assertEqual(ids, ["my-deals", "my-deals-2"])

    def test_patch_merges_top_level_keys(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = ConfigStore(config_path=Path(tmpdir) / "settings.yaml")
            patched = store.patch({"request_timeout_seconds": 20})
            self.assertEqual(patched.request_timeout_seconds, 20)
            self.assertEqual(store.load().request_timeout_seconds, 20)

    def test_invalid_yaml_content_raises(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "settings.yaml"
            config_path.write_text(yaml.safe_dump(["not", "a", "mapping"]), encoding="utf-8")
            with self.assertRaises(ValueError):
                ConfigStore(config_path=config_path).load()


if __name__ == "__main__":
    unittest.main()

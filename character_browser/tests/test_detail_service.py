import asyncio
import unittest
from unittest.mock import patch

from ..errors import NetworkError
from ..models.character import Character, PlaceRef
from ..services.api_client import ApiClient
from ..services.detail_service import DetailService, EPISODES_UNAVAILABLE
from ..utils.cache import UrlCache
from .fakes import BASE, FakeSession, make_character, make_episode, make_location


class TestUrlCache(unittest.IsolatedAsyncioTestCase):
    async def test_concurrent_lookups_share_one_fetch(self):
        calls = []

        async def fetch(url):
            calls.append(url)
            await asyncio.sleep(0.01)
            return {"url": url}

        cache = UrlCache(fetch)
        results = await asyncio.gather(*(cache.get("a") for _ in range(5)))
        self.assertEqual(calls, ["a"])
        self.assertTrue(all(r == {"url": "a"} for r in results))
        self.assertEqual(await cache.get("a"), {"url": "a"})
        self.assertEqual(cache.stats(), {"size": 1, "hits": 5, "misses": 1})

    async def test_failures_are_not_cached(self):
        attempts = []

        async def fetch(url):
            attempts.append(url)
            if len(attempts) == 1:
                raise NetworkError("down")
            return "ok"

        cache = UrlCache(fetch)
        with self.assertRaises(NetworkError):
            await cache.get("a")
        self.assertNotIn("a", cache)
        self.assertEqual(await cache.get("a"), "ok")
        self.assertEqual(len(cache), 1)


@patch("character_browser.services.detail_service.Slogger")
class TestDetailService(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.rick = make_character(1, "Rick Sanchez", episodes=(1, 2, 3, 4, 5, 6))
        self.morty = make_character(2, "Morty Smith", episodes=(1,))
        self.summer = make_character(3, "Summer Smith")
        resources = {
            f"{BASE}/episode/{i}": make_episode(i, f"Episode {i}", characters=(1, 2, 3)) for i in range(1, 7)
        }
        resources[f"{BASE}/location/1"] = make_location(1, "Earth (C-137)", residents=(1, 2, 3))
        resources[f"{BASE}/location/3"] = make_location(3, "Citadel of Ricks", residents=(2,))
        self.session = FakeSession([self.rick, self.morty, self.summer], resources)
        self.service = DetailService(ApiClient(BASE, session=self.session))

    async def test_episode_names_are_limited(self, _log):
        names = await self.service.episode_names(Character.from_api(self.rick), limit=5)
        self.assertEqual(names, [f"S01E{i:02d} Episode {i}" for i in range(1, 6)])

    async def test_episode_lookups_are_cached(self, _log):
        rick = Character.from_api(self.rick)
        await self.service.episode_names(rick)
        await self.service.episode_names(Character.from_api(self.morty))
        episode_calls = [url for url, _ in self.session.calls if "/episode/" in url]
        self.assertEqual(len(episode_calls), 5)

    async def test_episode_failure_degrades_to_placeholder(self, log):
        self.session.fail_urls.add(f"{BASE}/episode/2")
        names = await self.service.episode_names(Character.from_api(self.rick))
        self.assertEqual(names, [EPISODES_UNAVAILABLE])
        log.warning.assert_called_once()

    async def test_location_detail(self, _log):
        detail = await self.service.location_detail(Character.from_api(self.rick).origin)
        self.assertEqual(detail.name, "Earth (C-137)")
        self.assertEqual(detail.dimension, "Dimension C-137")
        self.assertEqual(len(detail.residents), 3)

    async def test_unknown_location_is_none(self, _log):
        self.assertIsNone(await self.service.location_detail(PlaceRef(name="unknown")))
        self.assertEqual(self.session.calls, [])

    async def test_unreachable_location_is_none(self, log):
        self.assertIsNone(await self.service.location_detail(PlaceRef("Nowhere", f"{BASE}/location/99")))
        log.warning.assert_called_once()

    async def test_residents_many(self, _log):
        detail = await self.service.location_detail(PlaceRef("Earth", f"{BASE}/location/1"))
        residents = await self.service.residents(detail)
        self.assertEqual([c.name for c in residents], ["Rick Sanchez", "Morty Smith", "Summer Smith"])
        self.assertIn((f"{BASE}/character/1,2,3", {}), self.session.calls)

    async def test_residents_single_object_is_normalized(self, _log):
        detail = await self.service.location_detail(PlaceRef("Citadel", f"{BASE}/location/3"))
        residents = await self.service.residents(detail)
        self.assertEqual([c.id for c in residents], [2])

    async def test_residents_limit_and_failure(self, log):
        detail = await self.service.location_detail(PlaceRef("Earth", f"{BASE}/location/1"))
        self.assertEqual(len(await self.service.residents(detail, limit=2)), 2)
        self.session.fail_urls.add(f"{BASE}/character/1,2,3")
        self.assertEqual(await self.service.residents(detail), [])
        self.assertEqual(await self.service.residents(None), [])

    async def test_episode_characters(self, _log):
        episode, cast = await self.service.episode_characters(f"{BASE}/episode/1", limit=2)
        self.assertEqual(episode.code, "S01E01")
        self.assertEqual([c.id for c in cast], [1, 2])

    async def test_malformed_documents_degrade(self, log):
        self.session.resources[f"{BASE}/location/5"] = {**make_location(5, "Broken"), "id": None}
        self.session.resources[f"{BASE}/episode/7"] = {**make_episode(7, "Broken"), "id": "seven"}

        self.assertIsNone(await self.service.location_detail(PlaceRef("Broken", f"{BASE}/location/5")))
        self.assertEqual(await self.service.episode_characters(f"{BASE}/episode/7"), (None, []))
        broken = Character.from_api(make_character(9, episodes=(7,)))
        self.assertEqual(await self.service.episode_names(broken), [EPISODES_UNAVAILABLE])
        self.assertEqual(log.warning.call_count, 3)

    async def test_missing_episode(self, _log):
        episode, cast = await self.service.episode_characters(f"{BASE}/episode/404")
        self.assertIsNone(episode)
        self.assertEqual(cast, [])


if __name__ == "__main__":
    unittest.main()

import hashlib
import json
from unittest import mock
from urllib.parse import quote

from django.core.cache import cache
from django.test import Client, SimpleTestCase, override_settings

from String_Analyser.store import InMemoryStringStore


class StringApiTestCase(SimpleTestCase):
    def setUp(self):
        self.client = Client()
        self.store = InMemoryStringStore()
        patcher = mock.patch('String_Analyser.views.get_store', return_value=self.store)
        patcher.start()
        self.addCleanup(patcher.stop)
        # throttle history lives in the cache
        cache.clear()

    def post_value(self, payload):
        return self.client.post(
            "/strings",
            data=json.dumps(payload),
            content_type="application/json",
        )

    def detail_url(self, value):
        return "/strings/" + quote(value, safe="")


class CreateStringTests(StringApiTestCase):
    def test_create_racecar(self):
        resp = self.post_value({"value": "racecar"})
        self.assertEqual(resp.status_code, 201)
        data = resp.json()
        self.assertEqual(data["id"], hashlib.sha256(b"racecar").hexdigest())
        self.assertEqual(data["value"], "racecar")
        self.assertEqual(data["properties"], {
            "length": 7,
            "is_palindrome": True,
            "unique_characters": 4,
            "word_count": 1,
            "sha256_hash": data["id"],
            "character_frequency_map": {"r": 2, "a": 2, "c": 2, "e": 1},
        })
        self.assertTrue(data["created_at"].endswith("Z"))

    def test_value_is_not_trimmed(self):
        resp = self.post_value({"value": "  padded  "})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["value"], "  padded  ")
        self.assertEqual(resp.json()["properties"]["length"], 10)

    def test_empty_string_is_accepted(self):
        resp = self.post_value({"value": ""})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["properties"]["word_count"], 0)

    def test_duplicate_is_conflict(self):
        self.post_value({"value": "racecar"})
        resp = self.post_value({"value": "racecar"})
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["id"], hashlib.sha256(b"racecar").hexdigest())
        self.assertIn("error", resp.json())
        self.assertEqual(self.store.count(), 1)

    def test_missing_value_is_bad_request(self):
        resp = self.post_value({})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Missing 'value' field.")

    def test_non_object_body_is_bad_request(self):
        resp = self.post_value(["racecar"])
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Request body must be a JSON object.")

    def test_lone_surrogate_is_rejected_without_storing(self):
        resp = self.client.post(
            "/strings",
            data='{"value": "a\\ud800a"}',
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("error", resp.json())
        self.assertEqual(self.store.count(), 0)

    def test_nul_character_is_accepted(self):
        resp = self.post_value({"value": "a\x00b"})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["properties"]["length"], 3)

    def test_non_string_value_is_unprocessable(self):
        for value in [123, 1.5, True, ["a"], {"a": 1}, None]:
            resp = self.post_value({"value": value})
            self.assertEqual(resp.status_code, 422, value)
        self.assertEqual(self.store.count(), 0)

    def test_malformed_json_is_bad_request(self):
        resp = self.client.post("/strings", data="{not json", content_type="application/json")
        self.assertEqual(resp.status_code, 400)


class RetrieveDeleteStringTests(StringApiTestCase):
    def test_get_existing(self):
        self.post_value({"value": "Hello World"})
        resp = self.client.get(self.detail_url("Hello World"))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["value"], "Hello World")
        self.assertEqual(data["id"], hashlib.sha256(b"Hello World").hexdigest())
        self.assertFalse(data["properties"]["is_palindrome"])
        self.assertEqual(data["properties"]["word_count"], 2)

    def test_get_missing(self):
        resp = self.client.get(self.detail_url("missing"))
        self.assertEqual(resp.status_code, 404)
        self.assertIn("error", resp.json())

    def test_lookup_is_case_sensitive(self):
        self.post_value({"value": "Hello"})
        self.assertEqual(self.client.get(self.detail_url("hello")).status_code, 404)

    def test_value_with_slash(self):
        self.post_value({"value": "a/b"})
        self.assertEqual(self.client.get(self.detail_url("a/b")).status_code, 200)

    def test_delete_then_get(self):
        self.post_value({"value": "racecar"})
        resp = self.client.delete(self.detail_url("racecar"))
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(resp.content, b"")
        self.assertEqual(self.client.get(self.detail_url("racecar")).status_code, 404)

    def test_delete_missing(self):
        resp = self.client.delete(self.detail_url("racecar"))
        self.assertEqual(resp.status_code, 404)


class ListStringTests(StringApiTestCase):
    def setUp(self):
        super().setUp()
        for value in ["Hello World", "racecar", "noon", "A quick brown fox"]:
            self.post_value({"value": value})

    def test_list_all(self):
        resp = self.client.get("/strings")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["count"], 4)
        self.assertEqual(len(data["data"]), 4)
        self.assertEqual(data["filters_applied"], {})

    def test_contains_character(self):
        resp = self.client.get("/strings", {"contains_character": "o"})
        values = [r["value"] for r in resp.json()["data"]]
        self.assertEqual(values, ["Hello World", "noon", "A quick brown fox"])
        self.assertEqual(resp.json()["filters_applied"], {"contains_character": "o"})

    def test_combined_filters(self):
        resp = self.client.get("/strings", {
            "is_palindrome": "true",
            "min_length": "5",
            "max_length": "10",
            "word_count": "1",
        })
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual([r["value"] for r in data["data"]], ["racecar"])
        self.assertEqual(data["count"], 1)
        self.assertEqual(data["filters_applied"], {
            "is_palindrome": True,
            "min_length": 5,
            "max_length": 10,
            "word_count": 1,
        })

    def test_min_greater_than_max(self):
        resp = self.client.get("/strings", {"min_length": "5", "max_length": "3"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("error", resp.json())

    def test_invalid_filters(self):
        for params in [
            {"is_palindrome": "yes"},
            {"min_length": "abc"},
            {"max_length": "1.5"},
            {"word_count": ""},
            {"contains_character": "ab"},
        ]:
            resp = self.client.get("/strings", params)
            self.assertEqual(resp.status_code, 400, params)


class NaturalLanguageFilterTests(StringApiTestCase):
    url = "/strings/filter-by-natural-language"

    def setUp(self):
        super().setUp()
        for value in ["racecar", "noon", "Hello World", "step on no pets"]:
            self.post_value({"value": value})

    def test_single_word_palindromes(self):
        resp = self.client.get(self.url, {"query": "all single word palindromic strings"})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual([r["value"] for r in data["data"]], ["racecar", "noon"])
        self.assertEqual(data["count"], 2)
        self.assertEqual(data["interpreted_query"], {
            "original": "all single word palindromic strings",
            "parsed_filters": {"is_palindrome": True, "word_count": 1},
        })

    def test_missing_query(self):
        self.assertEqual(self.client.get(self.url).status_code, 400)

    def test_unparseable_query(self):
        resp = self.client.get(self.url, {"query": "something nice"})
        self.assertEqual(resp.status_code, 400)

    def test_conflicting_filters(self):
        resp = self.client.get(self.url, {"query": "strings longer than 10 and shorter than 5"})
        self.assertEqual(resp.status_code, 422)
        self.assertIn("interpreted_query", resp.json())


class ThrottleTests(StringApiTestCase):
    @override_settings(STRINGS_RATE_LIMIT="2/min")
    def test_requests_over_limit_are_rejected(self):
        self.assertEqual(self.client.get("/strings").status_code, 200)
        self.assertEqual(self.client.get("/strings").status_code, 200)
        self.assertEqual(self.client.get("/strings").status_code, 429)

    @override_settings(STRINGS_RATE_LIMIT=None)
    def test_limit_can_be_disabled(self):
        for _ in range(5):
            self.assertEqual(self.client.get("/strings").status_code, 200)


class MiscEndpointTests(SimpleTestCase):
    def test_index(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("message", resp.json())

    def test_schema(self):
        resp = self.client.get("/swagger.json")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("paths", resp.json())

import importlib.util
import json
import sys
import unittest
import urllib.error
import urllib.parse
from pathlib import Path
from unittest import mock


def load_cli():
    spec = importlib.util.spec_from_file_location(
        "project_updater_cli", Path(__file__).resolve().parents[1] / "project-updater.py"
    )
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module


cli = load_cli()

API = "https://api.example.test/version/check"


class FakeService:
    """Stands in for ``http_get_json`` with canned payloads per URL."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def __call__(self, url, timeout=10.0):
        self.calls.append((url, timeout))
        return self.responses.get(url, (None, "HTTP 404: Not Found"))


class ResolverTestCase(unittest.TestCase):
    def setUp(self) -> None:
        # collaborators are looked up on the launcher module registered here
        patcher = mock.patch.dict(sys.modules, {"project_updater_cli": cli})
        patcher.start()
        self.addCleanup(patcher.stop)


class ListPackagesTests(ResolverTestCase):
    def test_names_are_extracted(self) -> None:
        fake = FakeService(
            {API: ([{"name": "omen", "x": 1}, {"name": "other"}, {"id": 3}, "junk"], None)}
        )
        with mock.patch.object(cli, "http_get_json", fake):
            names = cli.VersionResolver(API, timeout=2.0).list_installable_packages()
        self.assertEqual(names, ["omen", "other"])
        self.assertEqual(fake.calls, [(API, 2.0)])

    def test_transport_error_is_fatal(self) -> None:
        fake = FakeService({API: (None, "timed out")})
        with mock.patch.object(cli, "http_get_json", fake):
            with self.assertRaises(cli.ResolutionError) as ctx:
                cli.VersionResolver(API).list_installable_packages()
        self.assertIn("timed out", ctx.exception.detail)
        self.assertEqual(len(fake.calls), 1)

    def test_wrong_shape_is_fatal(self) -> None:
        fake = FakeService({API: ({"name": "omen"}, None)})
        with mock.patch.object(cli, "http_get_json", fake):
            with self.assertRaises(cli.ResolutionError):
                cli.VersionResolver(API).list_installable_packages()


class ResolveLatestTests(ResolverTestCase):
    def test_release_fields(self) -> None:
        resolver = cli.VersionResolver(API)
        url = resolver.package_url("omen")
        fake = FakeService(
            {url: ({"version": "1.4.0", "url": "https://git.example/omen.git", "news": "+A"}, None)}
        )
        with mock.patch.object(cli, "http_get_json", fake):
            release = resolver.resolve_latest("omen")
        self.assertEqual(
            release,
            cli.ReleaseInfo("1.4.0", "https://git.example/omen.git", "+A"),
        )

    def test_missing_news_gives_empty_changelog(self) -> None:
        resolver = cli.VersionResolver(API)
        url = resolver.package_url("omen")
        fake = FakeService({url: ({"version": "2", "url": "u"}, None)})
        with mock.patch.object(cli, "http_get_json", fake):
            self.assertEqual(resolver.resolve_latest("omen").changelog_text, "")

    def test_missing_version_is_fatal(self) -> None:
        resolver = cli.VersionResolver(API)
        url = resolver.package_url("omen")
        fake = FakeService({url: ({"url": "u"}, None)})
        with mock.patch.object(cli, "http_get_json", fake):
            with self.assertRaises(cli.ResolutionError):
                resolver.resolve_latest("omen")

    def test_http_error_is_fatal(self) -> None:
        with mock.patch.object(cli, "http_get_json", FakeService({})):
            with self.assertRaises(cli.ResolutionError) as ctx:
                cli.VersionResolver(API).resolve_latest("omen")
        self.assertIn("HTTP 404", ctx.exception.detail)

    def test_package_url_encodes_name_and_keeps_query(self) -> None:
        url = cli.VersionResolver(API + "?channel=beta").package_url("my pkg&x")
        query = urllib.parse.parse_qs(urllib.parse.urlsplit(url).query)
        self.assertEqual(query, {"channel": ["beta"], "package": ["my pkg&x"]})


class HttpGetJsonTests(unittest.TestCase):
    def test_ok_list_payload(self) -> None:
        class Resp:
            def __enter__(self):
                return self

            def __exit__(self, *a):
                return False

            def read(self):
                return json.dumps([{"name": "omen"}]).encode("utf-8")

        with mock.patch.object(cli.urllib.request, "urlopen", lambda *a, **k: Resp()):
            data, error = cli.http_get_json("http://x")
        self.assertEqual(data, [{"name": "omen"}])
        self.assertIsNone(error)

    def test_http_error(self) -> None:
        def boom(*a, **k):
            raise urllib.error.HTTPError("http://x", 500, "uh oh", {}, None)

        with mock.patch.object(cli.urllib.request, "urlopen", boom):
            data, error = cli.http_get_json("http://x")
        self.assertIsNone(data)
        self.assertIn("HTTP 500", error)

    def test_bad_json(self) -> None:
        class Resp:
            def __enter__(self):
                return self

            def __exit__(self, *a):
                return False

            def read(self):
                return b"<html>"

        with mock.patch.object(cli.urllib.request, "urlopen", lambda *a, **k: Resp()):
            data, error = cli.http_get_json("http://x")
        self.assertIsNone(data)
        self.assertTrue(error)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

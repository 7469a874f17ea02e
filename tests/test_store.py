"""Tests for the content store."""

import logging
from datetime import date

import pytest

from sitecontent.errors import (
    ContentDirectoryError,
    FrontmatterError,
    UnknownKindError,
)
from sitecontent.store import ContentStore


class TestListAll:
    """Reading every entry of a kind."""

    def test_reads_all_well_formed_files(self, scenario):
        """Each .mdx file becomes one entry keyed by its base name."""
        entries = scenario.list_all("posts")
        assert sorted(e.slug for e in entries) == ["a", "b", "c"]
        beta = next(e for e in entries if e.slug == "b")
        assert beta.kind == "posts"
        assert beta.metadata.title == "Beta"
        assert beta.metadata.published_at == date(2024, 6, 1)
        assert beta.body == "B body"

    def test_skips_malformed_files(self, scenario, write_entry, caplog):
        """A corrupt file is logged and left out; the rest still load."""
        write_entry("posts", "broken.mdx", "---\ntitle: never closed\n")
        write_entry("posts", "bare.mdx", "---\nnot a pair\n---\nbody")
        with caplog.at_level(logging.WARNING, logger="sitecontent.store"):
            entries = scenario.list_all("posts")
        assert sorted(e.slug for e in entries) == ["a", "b", "c"]
        assert "broken.mdx" in caplog.text
        assert "bare.mdx" in caplog.text

    def test_skips_out_of_range_date(self, scenario, write_entry, caplog):
        """A date YAML cannot construct fails only its own file."""
        write_entry(
            "posts", "bad.mdx", "---\ntitle: Bad\npublishedAt: 2024-13-45\n---\nx\n"
        )
        with caplog.at_level(logging.WARNING, logger="sitecontent.store"):
            entries = scenario.list_all("posts")
        assert sorted(e.slug for e in entries) == ["a", "b", "c"]
        assert "bad.mdx" in caplog.text

    def test_skips_undecodable_files(self, scenario, content_root):
        """Files that are not UTF-8 are skipped like parse failures."""
        (content_root / "posts" / "binary.mdx").write_bytes(b"\xff\xfe\x00bad")
        assert len(scenario.list_all("posts")) == 3

    def test_ignores_other_extensions(self, scenario, write_entry):
        """Only .mdx files are content."""
        write_entry("posts", "notes.txt", "---\ntitle: nope\n---\n")
        write_entry("posts", "draft.md", "---\ntitle: nope\n---\n")
        assert len(scenario.list_all("posts")) == 3

    def test_missing_metadata_is_none(self, write_entry, store):
        """Absent keys stay missing rather than defaulted."""
        write_entry("posts", "plain.mdx", "Just a body.")
        (entry,) = store.list_all("posts")
        assert entry.metadata.title is None
        assert entry.metadata.summary is None
        assert entry.metadata.published_at is None
        assert entry.metadata.tags == []
        assert entry.title == "plain"

    def test_project_extras(self, write_entry, store):
        """Kind-specific keys are kept in the open bucket."""
        write_entry(
            "projects",
            "site.mdx",
            "---\ntitle: Site\ntags: [python, web]\nlink: https://example.com\n---\n",
        )
        (entry,) = store.list_all("projects")
        assert entry.metadata.tags == ["python", "web"]
        assert entry.metadata.get("link") == "https://example.com"
        assert entry.metadata.get("title") == "Site"
        assert entry.metadata.get("missing") is None

    def test_empty_directory(self, store):
        """No files, no entries."""
        assert store.list_all("projects") == []

    def test_rereads_on_every_call(self, scenario, write_entry):
        """Nothing is cached between calls."""
        assert len(scenario.list_all("posts")) == 3
        write_entry("posts", "d.mdx", "---\ntitle: Delta\n---\n")
        assert len(scenario.list_all("posts")) == 4

    def test_missing_directory_is_fatal(self, tmp_path):
        """An absent content directory fails the listing."""
        store = ContentStore(tmp_path / "nowhere")
        with pytest.raises(ContentDirectoryError):
            store.list_all("posts")

    def test_default_root_is_working_directory(self, tmp_path, monkeypatch):
        """Without a root the store reads ./content under the working directory."""
        monkeypatch.delenv("SITE_CONTENT_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        assert ContentStore().root == tmp_path / "content"

    def test_default_root_from_environment(self, content_root, monkeypatch):
        """SITE_CONTENT_DIR overrides the working directory."""
        monkeypatch.setenv("SITE_CONTENT_DIR", str(content_root))
        assert ContentStore().root == content_root

    def test_unknown_kind(self, store):
        """Only posts and projects exist."""
        with pytest.raises(UnknownKindError):
            store.list_all("recipes")

    def test_single_worker(self, scenario, content_root):
        """Sequential reading gives the same result."""
        serial = ContentStore(content_root, max_workers=1)
        assert serial.list_all("posts") == scenario.list_all("posts")

    def test_slugs(self, scenario):
        """Slugs come from file names."""
        assert scenario.slugs("posts") == ["a", "b", "c"]


class TestGetBySlug:
    """Looking up a single entry."""

    def test_found(self, scenario):
        """The slug names the file directly."""
        entry = scenario.get_by_slug("posts", "a")
        assert entry is not None
        assert entry.metadata.title == "Alpha"

    def test_missing_slug_is_none(self, scenario):
        """A missing file is a negative result, not an error."""
        assert scenario.get_by_slug("posts", "missing-slug") is None

    @pytest.mark.parametrize("slug", ["", "..", "../posts/a", "a/b"])
    def test_unsafe_slug_is_none(self, scenario, slug):
        """Slugs cannot escape the kind directory."""
        assert scenario.get_by_slug("posts", slug) is None

    def test_parse_error_propagates(self, scenario, write_entry):
        """A corrupt file is distinguishable from a missing one."""
        write_entry("posts", "broken.mdx", "---\ntitle: x\n")
        with pytest.raises(FrontmatterError):
            scenario.get_by_slug("posts", "broken")

    def test_out_of_range_date_is_parse_error(self, scenario, write_entry):
        """An impossible date is reported as a metadata error."""
        write_entry("posts", "bad.mdx", "---\npublishedAt: 2024-13-45\n---\nx\n")
        with pytest.raises(FrontmatterError):
            scenario.get_by_slug("posts", "bad")

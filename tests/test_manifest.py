"""
Tests for ManifestWriter and the result/manifest contracts.
"""

import json

from componentgen.generation.contracts import GenerationResult, RunManifest
from componentgen.generation.manifest import ManifestWriter


def fixed_clock():
    return "2026-01-02T03:04:05.678Z"


class TestGenerationResult:
    """Tests for GenerationResult helpers."""

    def test_summary_nulls_missing_fields(self):
        result = GenerationResult(name="Hero", success=False, error="boom")

        assert result.to_summary() == {
            "name": "Hero",
            "success": False,
            "filename": None,
            "chatUrl": None,
            "demoUrl": None,
            "error": "boom",
        }

    def test_summary_excludes_content(self):
        result = GenerationResult(name="Hero", success=True, content="code", filename="Hero.tsx")
        assert "content" not in result.to_summary()

    def test_has_content(self):
        assert GenerationResult(name="A", success=True, content="x").has_content is True
        assert GenerationResult(name="A", success=True, content="").has_content is False
        assert GenerationResult(name="A", success=False, content="x").has_content is False

    def test_describe(self):
        text = GenerationResult(
            name="Hero",
            success=True,
            filename="Hero.tsx",
            demo_url="https://demo",
        ).describe()

        assert "SUCCESS" in text
        assert "Hero.tsx" in text
        assert "https://demo" in text


class TestManifestWriter:
    """Tests for ManifestWriter.build and write."""

    def test_build_counts(self):
        results = [
            GenerationResult(name="Hero", success=True, content="x", filename="Hero.tsx"),
            GenerationResult(name="Footer", success=False, error="Rate limit exceeded"),
            GenerationResult(name="Faq", success=False, error="No prompt content found in faq.md"),
        ]

        manifest = ManifestWriter(clock=fixed_clock).build(results, package_path="./Site")

        assert manifest.generated == "2026-01-02T03:04:05.678Z"
        assert manifest.package_path == "./Site"
        assert manifest.total_components == 3
        assert manifest.successful == 1
        assert manifest.failed == 2
        assert [c["name"] for c in manifest.components] == ["Hero", "Footer", "Faq"]

    def test_build_empty(self):
        manifest = ManifestWriter(clock=fixed_clock).build([], package_path="p")
        assert (manifest.total_components, manifest.successful, manifest.failed) == (0, 0, 0)

    def test_write(self, tmp_path):
        writer = ManifestWriter(clock=fixed_clock)
        manifest = writer.build(
            [GenerationResult(name="Hero", success=True, content="x", filename="Hero.tsx")],
            package_path="./Site",
        )

        path = writer.write(manifest, tmp_path)

        assert path == tmp_path / "manifest.json"
        text = path.read_text(encoding="utf-8")
        assert text.startswith('{\n  "generated"')
        data = json.loads(text)
        assert list(data) == [
            "generated",
            "packagePath",
            "totalComponents",
            "successful",
            "failed",
            "components",
        ]
        assert data["components"][0]["filename"] == "Hero.tsx"

    def test_default_timestamp_is_utc_iso(self):
        manifest = ManifestWriter().build([], package_path="p")
        assert manifest.generated.endswith("Z")
        assert "T" in manifest.generated

    def test_custom_filename(self, tmp_path):
        writer = ManifestWriter(filename="run.json", clock=fixed_clock)
        path = writer.write(RunManifest("t", "p", 0, 0, 0), tmp_path)
        assert path.name == "run.json"

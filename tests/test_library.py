import json

import pytest

from core.errors import StorageError
from core.library.kv_store import JsonKeyValueStore
from core.library.store import EDIT_CHANGE_LOG, StyleLibrary
from core.models.domain import StyleAnalysisResult

ANALYSIS = StyleAnalysisResult(
    artistic_style="Ukiyo-e",
    visual_technique="Woodblock print",
    color_palette=["#112233", "#445566"],
    mood_keywords=["calm", "flat"],
    suggested_name="Edo Wave",
    reasoning="Flat color fields.",
    embedding=[0.5, 0.25],
)


class BrokenStore(JsonKeyValueStore):
    def set(self, key, value):
        raise StorageError("quota exceeded")


@pytest.fixture
def library(tmp_path):
    return StyleLibrary(JsonKeyValueStore(tmp_path / "library.json"))


def test_created_profile_starts_at_version_one(library):
    profile = library.create_from_analysis(ANALYSIS, ["data:image/png;base64,AAAA"])

    assert profile.version == 1
    assert profile.history == ()
    assert profile.name == "Edo Wave"
    assert profile.description == "Ukiyo-e"
    assert profile.palette == ("#112233", "#445566")
    assert profile.embedding == (0.5, 0.25)
    assert library.list() == [profile]


def test_new_profiles_are_listed_first(library):
    first = library.create_from_analysis(ANALYSIS, [])
    second = library.create_from_analysis(ANALYSIS, [])

    assert [profile.id for profile in library.list()] == [second.id, first.id]


def test_edits_snapshot_previous_state(library):
    profile = library.create_from_analysis(ANALYSIS, [])

    v2 = library.edit(profile.id, name="Edo Night")
    v3 = library.edit(profile.id, change_log="Darker palette", palette=["#000000"])

    assert (v2.version, v3.version) == (2, 3)
    assert [snapshot.version for snapshot in v3.history] == [2, 1]
    assert v3.history[0].change_log == "Darker palette"
    assert v3.history[1].change_log == EDIT_CHANGE_LOG
    assert v3.history[1].data.name == "Edo Wave"
    assert v3.name == "Edo Night"
    assert v3.palette == ("#000000",)
    # Earlier versions are never mutated.
    assert profile.version == 1 and profile.name == "Edo Wave"


def test_revert_creates_new_version(library):
    profile = library.create_from_analysis(ANALYSIS, [])
    library.edit(profile.id, name="Edo Night")
    library.edit(profile.id, moods=["dark"])

    reverted = library.revert(profile.id, 1)

    assert reverted.version == 4
    assert reverted.name == "Edo Wave"
    assert reverted.moods == ("calm", "flat")
    assert reverted.history[0].change_log == "Reverted to v1"
    assert [snapshot.version for snapshot in reverted.history] == [3, 2, 1]


def test_revert_to_missing_version_fails(library):
    profile = library.create_from_analysis(ANALYSIS, [])

    with pytest.raises(KeyError):
        library.revert(profile.id, 7)
    with pytest.raises(KeyError):
        library.edit("nope", name="x")


def test_only_style_fields_are_editable(library):
    profile = library.create_from_analysis(ANALYSIS, [])

    with pytest.raises(ValueError):
        library.edit(profile.id, version=9)


def test_library_round_trips_through_storage(tmp_path):
    path = tmp_path / "library.json"
    library = StyleLibrary(JsonKeyValueStore(path))
    profile = library.create_from_analysis(ANALYSIS, ["data:image/png;base64,AAAA"])
    library.edit(profile.id, name="Edo Night")

    reloaded = StyleLibrary(JsonKeyValueStore(path))
    profiles = reloaded.load()

    assert profiles == library.list()
    assert profiles[0].history[0].data.name == "Edo Wave"
    assert "palette_ai_profiles" in json.loads(path.read_text(encoding="utf-8"))


def test_corrupt_storage_loads_empty_library(tmp_path):
    path = tmp_path / "library.json"
    path.write_text("{not json", encoding="utf-8")
    library = StyleLibrary(JsonKeyValueStore(path))

    assert library.load() == []

    library.create_from_analysis(ANALYSIS, [])
    assert len(StyleLibrary(JsonKeyValueStore(path)).load()) == 1


def test_bad_entries_are_skipped(tmp_path):
    store = JsonKeyValueStore(tmp_path / "library.json")
    good = StyleLibrary(store)
    good.create_from_analysis(ANALYSIS, [])
    entries = json.loads(store.get("palette_ai_profiles"))
    store.set("palette_ai_profiles", json.dumps(entries + [{"name": "missing id"}, "junk"]))

    assert len(StyleLibrary(store).load()) == 1


def test_failed_write_keeps_memory_state(tmp_path):
    library = StyleLibrary(BrokenStore(tmp_path / "library.json"))

    profile = library.create_from_analysis(ANALYSIS, [])

    assert library.save() is False
    assert library.get(profile.id) == profile


def test_delete(library):
    profile = library.create_from_analysis(ANALYSIS, [])

    assert library.delete(profile.id) is True
    assert library.delete(profile.id) is False
    assert library.list() == []


def test_single_string_edits_are_one_entry(library):
    profile = library.create_from_analysis(ANALYSIS, [])

    updated = library.edit(profile.id, palette="#AABBCC", moods="serene")

    assert updated.palette == ("#aabbcc",)
    assert updated.moods == ("serene",)


def test_invalid_palette_edit_is_rejected(library):
    profile = library.create_from_analysis(ANALYSIS, [])

    with pytest.raises(ValueError):
        library.edit(profile.id, palette=["#112233", "zzzzzz"])

    assert library.get(profile.id).version == 1

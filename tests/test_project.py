from pathlib import Path

import pytest

from html_localizer.config.settings import Config
from html_localizer.core.exceptions import ConfigurationError, ExportError
from html_localizer.core.models import FileLayout
from html_localizer.document import HtmlDocument
from html_localizer.project import Project


@pytest.fixture
def site(write_html):
    write_html("index.html", "<h1 loc:name='Title'>Welcome</h1><span loc:name='SR.html#Cancel'>Cancel</span>")
    write_html("empty.html", "<p>No fields here</p>")
    write_html("SR.html", "<div loc:fileOptions='ReferencesOnly'><span loc:name='Cancel'>Cancel</span></div>")
    write_html("docs/guide.html", "<p loc:name='Intro'>Read this</p>")
    write_html("docs/notes.txt", "not html")


def test_open_directory_adds_documents_with_fields(tmp_path, site):
    project = Project()

    project.open_directory(tmp_path)

    assert [d.path for d in project.documents] == ["SR.html", "index.html", "docs/guide.html"]
    assert project.find_document("sr.html") is project.get_document("SR.html")
    assert project.get_document("sr.html") is None


def test_open_directory_merges_existing_documents(tmp_path, site, write_html):
    project = Project()
    project.open_directory(tmp_path)
    project.get_document("index.html").fields["Title"].set_value("fr", "innerText", "Bienvenue")

    write_html("index.html", "<h1 loc:name='Title'>Welcome!</h1>")
    project.open_directory(tmp_path)

    assert len(project.documents) == 3
    document = project.get_document("index.html")
    assert document.fields["Title"].get_value("", "innerText") == "Welcome!"
    assert document.fields["Title"].get_value("fr", "innerText") == "Bienvenue"
    assert document.fields["SR.html#Cancel"].exists is False


def test_open_directory_matches_paths_ignoring_case(tmp_path, write_html):
    write_html("index.html", "<h1 loc:name='Title'>Welcome</h1>")
    project = Project()
    project.add_document(HtmlDocument("Index.html"))

    project.open_directory(tmp_path)

    assert len(project.documents) == 1
    assert project.documents[0].path == "index.html"
    assert "Title" in project.documents[0].fields


def test_unreadable_directories_are_skipped(tmp_path, write_html, monkeypatch):
    write_html("index.html", "<h1 loc:name='Title'>Welcome</h1>")
    write_html("locked/page.html", "<h1 loc:name='Title'>Hidden</h1>")
    iterdir = Path.iterdir

    def guarded_iterdir(self):
        if self.name == "locked":
            raise PermissionError("denied")
        return iterdir(self)

    monkeypatch.setattr(Path, "iterdir", guarded_iterdir)

    files = Project().enumerate_files(tmp_path)

    assert [f.name for f in files] == ["index.html"]


def test_add_document_rejects_duplicate_paths():
    project = Project()
    project.add_document(HtmlDocument("index.html"))

    with pytest.raises(ValueError):
        project.add_document(HtmlDocument("INDEX.html"))
    with pytest.raises(ValueError):
        project.add_document(HtmlDocument())


def test_project_cultures(tmp_path, site):
    project = Project()
    project.open_directory(tmp_path)
    project.get_document("docs/guide.html").fields["Intro"].set_value("de", "innerText", "Lies das")
    project.get_document("SR.html").fields["Cancel"].set_value("fr", "innerText", "Annuler")

    assert project.cultures() == ["fr", "de"]


def test_resolve_reference_through_project(tmp_path, site):
    project = Project()
    project.open_directory(tmp_path)
    reference = project.get_document("index.html").fields["SR.html#Cancel"]

    target = project.resolve_reference(reference)

    assert target is project.get_document("SR.html").fields["Cancel"]


@pytest.mark.parametrize("layout, expected", [
    (FileLayout.SUBDIRECTORY, "fr/index.html"),
    ("SubDirectory", "fr/index.html"),
    (FileLayout.EXTENSIONS, "index.fr.html"),
    ("extensions", "index.fr.html"),
])
def test_generate_file_name(layout, expected):
    assert Project().generate_file_name(HtmlDocument("index.html"), "fr", layout) == expected


def test_generate_file_name_keeps_directory():
    project = Project()
    document = HtmlDocument("docs/guide.html")

    assert project.generate_file_name(document, "fr-CA", FileLayout.SUBDIRECTORY) == "docs/fr-CA/guide.html"
    assert project.generate_file_name(document, "fr-CA", FileLayout.EXTENSIONS) == "docs/guide.fr-CA.html"


def test_generate_file_name_rejects_unknown_layout():
    with pytest.raises(ConfigurationError):
        Project().generate_file_name(HtmlDocument("index.html"), "fr", "Flat")


def test_localize_all_writes_subdirectory_layout(tmp_path, site):
    project = Project()
    project.open_directory(tmp_path)
    project.get_document("SR.html").fields["Cancel"].set_value("fr", "innerText", "Annuler")
    project.get_document("index.html").fields["Title"].set_value("fr", "innerText", "Bienvenue")

    written = project.localize_all()

    assert sorted(written) == ["fr"]
    assert sorted(p.relative_to(tmp_path).as_posix() for p in written["fr"]) == [
        "docs/fr/guide.html", "fr/index.html",
    ]
    assert (tmp_path / "fr" / "index.html").read_text(encoding="utf-8") == \
        "<h1>Bienvenue</h1><span>Annuler</span>"
    assert (tmp_path / "docs" / "fr" / "guide.html").read_text(encoding="utf-8") == "<p>Read this</p>"
    assert not (tmp_path / "fr" / "SR.html").exists()


def test_localize_writes_extensions_layout(tmp_path, site):
    project = Project()
    project.open_directory(tmp_path)
    project.get_document("index.html").fields["Title"].set_value("de", "innerText", "Willkommen")

    written = project.localize("de", "Extensions")

    assert (tmp_path / "index.de.html") in written
    assert (tmp_path / "index.de.html").read_text(encoding="utf-8").startswith("<h1>Willkommen</h1>")
    assert (tmp_path / "docs" / "guide.de.html").exists()


def test_localize_all_with_unknown_layout_writes_nothing(tmp_path, site):
    project = Project()
    project.open_directory(tmp_path)

    with pytest.raises(ConfigurationError):
        project.localize_all(["fr"], "Flat")

    assert not (tmp_path / "fr").exists()


def test_localize_all_rejects_empty_culture(tmp_path, site):
    project = Project()
    project.open_directory(tmp_path)

    with pytest.raises(ValueError):
        project.localize_all([""])


def test_rendered_output_is_not_picked_up_by_rescan(tmp_path, site):
    project = Project()
    project.open_directory(tmp_path)
    project.get_document("index.html").fields["Title"].set_value("fr", "innerText", "Bienvenue")
    project.localize_all()

    project.open_directory(tmp_path)

    assert [d.path for d in project.documents] == ["SR.html", "index.html", "docs/guide.html"]


def test_write_failure_raises_export_error(tmp_path, site):
    project = Project()
    project.open_directory(tmp_path)
    (tmp_path / "fr").write_text("a file where a directory is expected", encoding="utf-8")

    with pytest.raises(ExportError):
        project.localize_all(["fr"])


def test_parallel_mode_matches_sequential(tmp_path, site):
    sequential = Project()
    sequential.open_directory(tmp_path)
    parallel = Project(config=Config(parallel_enabled=True, max_workers=2))
    parallel.open_directory(tmp_path)

    assert [d.path for d in parallel.documents] == [d.path for d in sequential.documents]
    for left, right in zip(sequential.documents, parallel.documents):
        assert list(left.fields) == list(right.fields)

    parallel.get_document("index.html").fields["Title"].set_value("fr", "innerText", "Bienvenue")
    written = parallel.localize_all()

    assert len(written["fr"]) == 2
    assert (tmp_path / "fr" / "index.html").read_text(encoding="utf-8").startswith("<h1>Bienvenue</h1>")


def test_save_and_load_round_trip(tmp_path, site):
    project = Project()
    project.open_directory(tmp_path)
    project.get_document("SR.html").fields["Cancel"].set_value("fr", "innerText", "Annuler")
    record_path = tmp_path / "localization.json"

    project.save(record_path)
    loaded = Project.load(record_path)

    assert loaded.base_directory == tmp_path.resolve()
    assert loaded.options == project.options
    assert [d.path for d in loaded.documents] == [d.path for d in project.documents]
    for original, restored in zip(project.documents, loaded.documents):
        assert restored.options == original.options
        assert restored.project is loaded
        assert restored.tree is not None
        assert list(restored.fields) == list(original.fields)

    assert loaded.get_document("index.html").localize("fr") == "<h1>Welcome</h1><span>Annuler</span>"


def test_open_without_record_starts_empty_project(tmp_path):
    project = Project.open(tmp_path / "localization.json")

    assert project.documents == []
    assert project.base_directory == tmp_path.resolve()


def test_paths_differing_only_by_case_share_one_document(tmp_path, write_html):
    upper = write_html("Page.html", "<h1 loc:name='Title'>Upper</h1>")
    lower = write_html("page.html", "<h1 loc:name='Title'>Lower</h1>")
    project = Project(config=Config(parallel_enabled=True, max_workers=2))

    touched = project.open_directory(tmp_path, [upper, lower])

    assert [d.path for d in touched] == ["Page.html"]
    assert [d.path for d in project.documents] == ["Page.html"]

    record_path = tmp_path / "localization.json"
    project.save(record_path)
    assert [d.path for d in Project.load(record_path).documents] == ["Page.html"]

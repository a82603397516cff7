import pytest

from html_localizer.document import HtmlDocument
from html_localizer.project import Project


@pytest.fixture
def project():
    return Project()


@pytest.fixture
def make_document(project):
    """Create a document in ``project`` from markup and extract its fields."""
    def _make(path, html, extract=True):
        document = HtmlDocument(path)
        project.add_document(document)
        document.load_html(html)
        if extract:
            document.extract_fields()
        return document
    return _make


@pytest.fixture
def write_html(tmp_path):
    """Write an HTML file under ``tmp_path`` and return its path."""
    def _write(relative_path, html):
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        return path
    return _write

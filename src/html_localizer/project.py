"""Project: the set of localized documents under one base directory."""

import os
import posixpath
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from tqdm import tqdm

from html_localizer.config.settings import Config
from html_localizer.core.constants import Encodings, HTMLFiles
from html_localizer.core.exceptions import ExportError, MissingFileError
from html_localizer.core.models import DirectField, Field, FileLayout
from html_localizer.core.options import ProjectOptions
from html_localizer.document import HtmlDocument
from html_localizer.exporters.project_exporter import dumps_project, export_project
from html_localizer.parsers.html_parser import read_html_file
from html_localizer.validators.record_validator import ProjectRecord, parse_project_record
from html_localizer.utils.logger import get_logger

logger = get_logger(__name__)


class Project:
    """Root aggregate: documents, shared options and the base directory."""

    def __init__(self, base_directory: Optional[Path] = None,
                 options: Optional[ProjectOptions] = None,
                 config: Optional[Config] = None):
        """
        Initialize project.

        Args:
            base_directory: Root all document paths are relative to
            options: Localization options (defaults when not provided)
            config: Optional configuration (parallelism, progress display)
        """
        self.base_directory = Path(base_directory) if base_directory is not None else None
        self.options = options or ProjectOptions()
        self.config = config or Config()
        self.documents: List[HtmlDocument] = []

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def add_document(self, document: HtmlDocument) -> HtmlDocument:
        """
        Attach a document to the project.

        Raises:
            ValueError: If the path is missing or already used (case-insensitive)
        """
        if document is None:
            raise ValueError("Document is required")
        if not document.path:
            raise ValueError("Document path is required")
        if self.find_document(document.path) is not None:
            raise ValueError(f"Document '{document.path}' already exists in the project")

        document.project = self
        self.documents.append(document)
        return document

    def find_document(self, path: str) -> Optional[HtmlDocument]:
        """Document whose path matches ``path`` ignoring case."""
        if path is None:
            raise ValueError("Document path is required")

        key = path.lower()
        return next((d for d in self.documents if d.path and d.path.lower() == key), None)

    def get_document(self, path: str) -> Optional[HtmlDocument]:
        """Document whose path is exactly ``path``; used to resolve references."""
        if path is None:
            raise ValueError("Document path is required")

        return next((d for d in self.documents if d.path == path), None)

    def resolve_reference(self, field: Field) -> Optional[Field]:
        """Resolve a reference field through the document it belongs to."""
        if field is None:
            raise ValueError("Field is required")
        if not field.is_reference or not field.document_path:
            return None

        document = self.get_document(field.document_path)
        if document is None:
            return None
        return document.resolve_reference(field)

    # ------------------------------------------------------------------
    # Directory scan
    # ------------------------------------------------------------------

    def open_directory(self, directory: Path, files: Optional[Iterable[Path]] = None) -> List[HtmlDocument]:
        """
        Scan ``directory`` for HTML files and extract their fields.

        Existing documents are re-extracted and merged; new documents are
        added only when they contain at least one field. All documents are
        fully extracted before this returns.

        Args:
            directory: Base directory of the project
            files: Files to process; every ``*.html`` under ``directory`` when omitted

        Returns:
            Documents touched by the scan, in file order
        """
        if directory is None:
            raise ValueError("Directory is required")

        directory = Path(directory)
        self.base_directory = directory
        if files is None:
            files = self.enumerate_files(directory)
        files = list(files)
        logger.info(f"Scanning {len(files)} HTML files under {directory}")

        # Keyed by lower-cased path; one job per document
        pending: Dict[str, Tuple[HtmlDocument, Path, bool]] = {}
        for file_path in files:
            relative_path = self.get_file_path(directory, file_path)
            key = relative_path.lower()
            if key in pending:
                logger.warning(f"Skipping {relative_path}: same path as "
                               f"{pending[key][0].path} ignoring case")
                continue

            document = self.find_document(relative_path)
            created = document is None
            if created:
                document = HtmlDocument(relative_path)
            document.project = self
            document.path = relative_path
            pending[key] = (document, Path(file_path), created)
        jobs = list(pending.values())

        with tqdm(total=len(jobs), desc="Extracting fields", unit="file",
                  disable=not self.config.show_progress) as progress_bar:
            if self.config.parallel_enabled and len(jobs) > 1:
                with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                    for _ in executor.map(lambda job: self._extract_document(job[0], job[1]), jobs):
                        progress_bar.update(1)
            else:
                for document, file_path, _ in jobs:
                    self._extract_document(document, file_path)
                    progress_bar.update(1)

        added = 0
        for document, _, created in jobs:
            if created and len(document.fields) > 0:
                self.documents.append(document)
                added += 1

        logger.info(f"Scan complete: {len(jobs)} files processed, {added} new documents, "
                    f"{len(self.documents)} documents in project")
        return [document for document, _, _ in jobs]

    def _extract_document(self, document: HtmlDocument, file_path: Path) -> None:
        document.load_html(read_html_file(file_path))
        extracted = document.extract_fields()
        logger.debug(f"{document.path}: {len(extracted)} fields")

    def enumerate_files(self, directory: Path) -> List[Path]:
        """
        List ``*.html`` files under ``directory`` recursively.

        Directories that cannot be read are skipped.
        """
        files: List[Path] = []
        self._enumerate_files(Path(directory), files)
        return files

    def _enumerate_files(self, directory: Path, files: List[Path]) -> None:
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            return

        subdirectories = []
        for entry in entries:
            try:
                if entry.is_dir():
                    subdirectories.append(entry)
                elif entry.is_file() and entry.suffix.lower() == HTMLFiles.EXTENSION:
                    files.append(entry)
            except OSError as e:
                logger.debug(f"Skipping unreadable entry {entry}: {e}")

        for subdirectory in subdirectories:
            self._enumerate_files(subdirectory, files)

    @staticmethod
    def get_file_path(directory: Path, file_path: Path) -> str:
        """Path of ``file_path`` relative to ``directory``, with forward slashes."""
        if directory is None or file_path is None:
            raise ValueError("Directory and file path are required")

        relative = os.path.relpath(os.path.abspath(file_path), os.path.abspath(directory))
        return relative.replace(os.sep, '/')

    # ------------------------------------------------------------------
    # Cultures and rendering
    # ------------------------------------------------------------------

    def cultures(self) -> List[str]:
        """Every non-invariant culture found in any field, in first-seen order."""
        found = []
        for document in self.documents:
            for culture in document.cultures():
                if culture not in found:
                    found.append(culture)
        return found

    def generate_file_name(self, document: HtmlDocument, culture: str,
                           file_layout: Union[FileLayout, str] = FileLayout.SUBDIRECTORY) -> Optional[str]:
        """
        Relative output path of ``document`` for ``culture``.

        ``SubDirectory`` gives ``dir/<culture>/name.html``; ``Extensions``
        gives ``dir/name.<culture>.html``.

        Raises:
            ConfigurationError: If the layout is unknown
        """
        layout = FileLayout.parse(file_layout)
        path = document.path
        if not path:
            return path

        directory, file_name = posixpath.split(path)
        if layout is FileLayout.EXTENSIONS:
            stem, extension = posixpath.splitext(file_name)
            return posixpath.join(directory, f"{stem}.{culture}{extension}")
        return posixpath.join(directory, culture, file_name)

    def localize(self, culture: str,
                 file_layout: Union[FileLayout, str] = FileLayout.SUBDIRECTORY) -> List[Path]:
        """
        Render and write every localizable document for ``culture``.

        Returns:
            Paths written
        """
        return self.localize_all([culture], file_layout)[culture]

    def localize_all(self, cultures: Optional[List[str]] = None,
                     file_layout: Union[FileLayout, str] = FileLayout.SUBDIRECTORY) -> Dict[str, List[Path]]:
        """
        Render and write every localizable document for each culture.

        Args:
            cultures: Cultures to render; every discovered culture when omitted
            file_layout: Output path layout

        Returns:
            Paths written, per culture

        Raises:
            ConfigurationError: If the layout is unknown (nothing is written)
            ExportError: If an output file cannot be written
        """
        layout = FileLayout.parse(file_layout)
        if cultures is None:
            cultures = self.cultures()
        for culture in cultures:
            if not culture:
                raise ValueError("Culture is required")

        jobs = [(document, culture)
                for culture in cultures
                for document in self.documents
                if document.can_localize()]
        logger.info(f"Rendering {len(jobs)} documents for cultures: {', '.join(cultures) or '(none)'}")

        written: Dict[str, List[Path]] = {culture: [] for culture in cultures}
        with tqdm(total=len(jobs), desc="Rendering documents", unit="file",
                  disable=not self.config.show_progress) as progress_bar:
            if self.config.parallel_enabled and len(jobs) > 1:
                with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                    results = executor.map(lambda job: self._write_localized(job[0], job[1], layout), jobs)
                    for (_, culture), output_path in zip(jobs, results):
                        if output_path is not None:
                            written[culture].append(output_path)
                        progress_bar.update(1)
            else:
                for document, culture in jobs:
                    output_path = self._write_localized(document, culture, layout)
                    if output_path is not None:
                        written[culture].append(output_path)
                    progress_bar.update(1)

        return written

    def _write_localized(self, document: HtmlDocument, culture: str, layout: FileLayout) -> Optional[Path]:
        html = document.localize(culture)
        if html is None:
            return None

        output_path = Path(self.generate_file_name(document, culture, layout))
        if self.base_directory is not None:
            output_path = self.base_directory / output_path

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding=Encodings.OUTPUT)
        except OSError as e:
            raise ExportError(str(e), output_path, "HTML") from e

        logger.for_document(document.path, culture).debug(f"Wrote {output_path}")
        return output_path

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def dumps(self) -> str:
        return dumps_project(self)

    def save(self, path: Path) -> None:
        if path is None:
            raise ValueError("Path is required")
        export_project(self, Path(path))

    @classmethod
    def from_record(cls, record: ProjectRecord, base_directory: Optional[Path] = None,
                    config: Optional[Config] = None, load_markup: bool = True) -> 'Project':
        """
        Rebuild a project from a validated record.

        Each document is re-linked to the project and, when ``load_markup``
        is set, its markup is parsed again from disk.
        """
        options = ProjectOptions(record.options.localizable_attributes,
                                 record.options.localizable_attributes_by_tag)
        project = cls(base_directory, options, config)

        for document_record in record.files:
            document = HtmlDocument(document_record.path, options=document_record.options)
            for field_record in document_record.field_entries:
                field = Field.create(field_record.name,
                                     sort_order=field_record.sort_order,
                                     source_html=field_record.source_html,
                                     exists=field_record.exists,
                                     document_path=document.path)
                if isinstance(field, DirectField):
                    for attribute, localizations in (field_record.values or {}).items():
                        for culture, text in localizations.items():
                            if text is not None:
                                field.set_value(culture, attribute, text)
                document.fields.append(field)

            project.add_document(document)
            if load_markup:
                document.load_html()

        return project

    @classmethod
    def loads(cls, text: str, base_directory: Optional[Path] = None,
              config: Optional[Config] = None, load_markup: bool = True) -> 'Project':
        return cls.from_record(parse_project_record(text), base_directory, config, load_markup)

    @classmethod
    def load(cls, path: Path, base_directory: Optional[Path] = None,
             config: Optional[Config] = None) -> 'Project':
        """
        Load a project record; the base directory defaults to the record's directory.

        Raises:
            MissingFileError: If the record does not exist
            ProjectRecordError: If the record is invalid
        """
        path = Path(path)
        if not path.is_file():
            raise MissingFileError(path, "Project record")

        if base_directory is None:
            base_directory = path.resolve().parent

        text = path.read_text(encoding=Encodings.PREFERRED_ORDER[0])
        record = parse_project_record(text, path)
        project = cls.from_record(record, base_directory, config)
        logger.info(f"Loaded project {path}: {len(project.documents)} documents")
        return project

    @classmethod
    def open(cls, path: Path, config: Optional[Config] = None) -> 'Project':
        """Load the record at ``path``, or start an empty project when it does not exist."""
        path = Path(path)
        if path.is_file():
            return cls.load(path, config=config)

        logger.info(f"No project record at {path}; starting a new project")
        return cls(path.resolve().parent, config=config)

    def __repr__(self) -> str:
        return f"Project(base_directory={self.base_directory!r}, documents={len(self.documents)})"

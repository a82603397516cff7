"""Project record export."""

from html_localizer.exporters.project_exporter import export_project, dumps_project, print_summary, project_summary

__all__ = ['export_project', 'dumps_project', 'print_summary', 'project_summary']

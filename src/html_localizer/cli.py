"""Command-line entry point: extract fields, save the project, render every culture."""

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv

from html_localizer.config.settings import Config
from html_localizer.core.exceptions import LocalizerError
from html_localizer.core.models import FileLayout
from html_localizer.exporters.project_exporter import print_summary
from html_localizer.project import Project
from html_localizer.utils.logger import get_logger, setup_logging


def build_parser(env_config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='html-localizer',
        description='Extract translatable fields from HTML files and render one copy per culture'
    )
    parser.add_argument(
        'project',
        nargs='?',
        default=str(env_config.project_path) if env_config.project_path else None,
        help='Path to the project record (e.g., localization.json); '
             'its directory is scanned for HTML files'
    )
    parser.add_argument(
        '--extract-only',
        action='store_true',
        default=env_config.extract_only,
        help='Update the project record without rendering localized files'
    )
    parser.add_argument(
        '--file-layout',
        type=str,
        default=env_config.file_layout.value,
        help=f'Output layout: {", ".join(layout.value for layout in FileLayout)} '
             f'(default: {env_config.file_layout.value})'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        default=env_config.verbose,
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=env_config.log_level,
        help=f'Logging level (default: {env_config.log_level})'
    )
    parser.add_argument(
        '--parallel',
        action='store_true',
        default=env_config.parallel_enabled,
        help='Extract and render documents with a thread pool'
    )
    parser.add_argument(
        '--max-workers',
        type=int,
        default=env_config.max_workers,
        help=f'Worker threads for --parallel (default: {env_config.max_workers})'
    )
    parser.add_argument(
        '--no-progress',
        dest='progress',
        action='store_false',
        default=env_config.show_progress,
        help='Disable progress bars'
    )
    return parser


def run(config: Config) -> int:
    """
    Run extraction and, unless ``extract_only``, rendering.

    Returns:
        Process exit code
    """
    logger = get_logger(__name__)

    project = Project.open(config.project_path, config)
    project.open_directory(config.base_directory)
    project.save(config.project_path)

    written = None
    if not config.extract_only:
        cultures = project.cultures()
        if not cultures:
            logger.warning("No translations found; nothing to render")
        written = project.localize_all(cultures, config.file_layout)
        logger.info(f"Rendered {sum(len(paths) for paths in written.values())} files "
                    f"for {len(cultures)} cultures")

    print_summary(project, written)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()

    try:
        env_config = Config.from_env()
        args = build_parser(env_config).parse_args(argv)
        config = Config.from_args(args)
    except LocalizerError as e:
        setup_logging()
        get_logger(__name__).error(str(e))
        return 1

    setup_logging(config.log_level, config.log_format, config.log_date_format)
    logger = get_logger(__name__)

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    logger.info(f"Configuration: file_layout={config.file_layout.value}, "
                f"extract_only={config.extract_only}, parallel={config.parallel_enabled}")

    try:
        return run(config)
    except LocalizerError as e:
        logger.error(str(e))
        return 1


if __name__ == '__main__':
    sys.exit(main())

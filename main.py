"""Main script for extracting and rendering localized HTML templates."""

import sys

from html_localizer.cli import main


if __name__ == '__main__':
    sys.exit(main())

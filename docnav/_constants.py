"""Common literal values used across docnav.

These constants keep manifest filenames centralized so the publisher, CLI, and
tests can import the same values without drifting. Intended for internal use
within the docnav package.

Examples
--------
>>> from docnav import _constants
>>> _constants.NAV_DATA_FILENAME
'nav-data.json'
"""

NAV_DATA_FILENAME = "nav-data.json"
PAGES_MANIFEST_FILENAME = "pages.json"
RAW_TEXT_FILENAME = "raw-text.json"
PAGE_FILENAME = "index.html"

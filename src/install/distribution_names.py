"""Import-name to distribution-name mapping.

Many distributions install a top-level module whose name differs from the
name pip resolves. This module maps identifiers to installable names.
"""

from __future__ import annotations

from core.types import PackageIdentifier

_DISTRIBUTION_OVERRIDES = {
    "attr": "attrs",
    "bs4": "beautifulsoup4",
    "Crypto": "pycryptodome",
    "cv2": "opencv-python",
    "dateutil": "python-dateutil",
    "docx": "python-docx",
    "dotenv": "python-dotenv",
    "fitz": "PyMuPDF",
    "github": "PyGithub",
    "google.protobuf": "protobuf",
    "jose": "python-jose",
    "jwt": "PyJWT",
    "magic": "python-magic",
    "MySQLdb": "mysqlclient",
    "OpenSSL": "pyOpenSSL",
    "PIL": "Pillow",
    "pptx": "python-pptx",
    "psycopg2": "psycopg2-binary",
    "serial": "pyserial",
    "skimage": "scikit-image",
    "sklearn": "scikit-learn",
    "slugify": "python-slugify",
    "telegram": "python-telegram-bot",
    "usb": "pyusb",
    "win32api": "pywin32",
    "yaml": "PyYAML",
    "zmq": "pyzmq",
}


def distribution_for(identifier: PackageIdentifier) -> str:
    """Return the pip distribution name that provides an identifier.

    Args:
        identifier: Normalized package identifier.

    Returns:
        Distribution name; scoped identifiers are dash-joined.
    """
    override = _DISTRIBUTION_OVERRIDES.get(identifier)
    if override is not None:
        return override
    return identifier.replace(".", "-")

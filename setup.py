"""Setup script for the nmwatch package."""

from setuptools import find_packages, setup

DBUS_REQUIRES = [
    "dbus-python",
    "PyGObject",
]

PUBLISHER_REQUIRES = [
    "pyyaml",
    "python-dotenv",
    "paho-mqtt>=2.0.0",
]

setup(
    name="nmwatch",
    version="0.1.0",
    description="NetworkManager connectivity watcher with connected/disconnected listeners",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "dbus": DBUS_REQUIRES,
        # nmwatch-publisher needs both: pip install nmwatch[publisher,dbus]
        "publisher": PUBLISHER_REQUIRES,
        "dev": DBUS_REQUIRES + PUBLISHER_REQUIRES + [
            "pytest",
            "black",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "nmwatch-publisher=nmwatch.publisher:main",
        ],
    },
)

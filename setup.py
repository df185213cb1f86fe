"""Setup configuration for event-folders package."""

from setuptools import find_packages, setup

# Read version from __version__.py
version = {}
with open("src/python/event_folders/__version__.py") as f:
    exec(f.read(), version)

# Read README
with open("README.md", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="event-folders",
    version=version["__version__"],
    description="Date-prefix and tag media event folders from their oldest file dates",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Event Folders Team",
    python_requires=">=3.11",
    package_dir={"": "src/python"},
    packages=find_packages(where="src/python", include=["event_folders", "event_folders.*"]),
    install_requires=[
        "pyyaml>=6.0.1",
        "pandas>=2.1.4",
        "pillow>=10.2.0",
        "exifread>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.12.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "event-folders=event_folders.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
    ],
)

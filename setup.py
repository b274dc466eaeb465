from setuptools import setup, find_packages

setup(
    name="folio-tools",
    version="1.0.0",
    description="Markdown directory indexer and case-preserving project renamer",
    author="Ashwin Nair",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "PyYAML>=6.0",
        "rich>=13.0",
        "tqdm>=4.66",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "file-index = file.indexer:cli",
            "project-rename = file.renamer:cli",
            "folio-config = common.shared.loader:cli_main",
        ],
    },
)

from setuptools import setup, find_packages

setup(
    name="mkdocs-d2m",
    version="0.3.0",
    description="MkDocs plugin that ingests Doxygen XML into a cross-referenced API model",
    keywords="mkdocs doxygen xml c++ documentation python",
    packages=find_packages(exclude=["tests"]),
    install_requires=[
        "mkdocs>=1.4",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.9",
    classifiers = [
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Documentation",
        "Topic :: Software Development :: Documentation",
        "Framework :: MkDocs",
    ],
    entry_points={
        "mkdocs.plugins": [
            "d2m = mkdocs_d2m.plugin:D2mPlugin",
        ],
    },
)

from setuptools import find_packages, setup  # type: ignore
from lazystream import __version__

setup(
    name="lazystream",
    version=__version__,
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"lazystream": ["py.typed"]},
    python_requires=">=3.8",
    extras_require={
        "test": ["pytest"],
        "docs": ["sphinx", "myst-parser", "sphinx-autodoc-typehints", "furo"],
    },
    license="Apache 2.",
    description="Lazy single-pass streams, chunked streams and collectors over iterables",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
)

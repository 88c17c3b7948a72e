# pylint: disable=missing-module-docstring
from setuptools import setup

setup(
    name="symbcli",
    version="0.1.0",
    description="Console client for the symbology conversion service",
    author="imthor",
    install_requires=["aiohttp", "jsonschema", "pydantic>=2", "rich", "typer"],
    extras_require={"test": ["pytest", "pytest-asyncio"]},
    entry_points={"console_scripts": ["symbcli=symbcli.cli:main"]},
    license="MIT",
    packages=["symbcli"],
)

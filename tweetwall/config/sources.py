"""
Discovery of configuration documents.

For one logical filename the documents are collected in this order:

    1. package resources   <package>/<filename>   (packages in given order)
    2. home directory      <home>/<filename>
    3. etc directory       <workdir>/etc/<filename>
    4. working directory   <workdir>/<filename>

Later documents take precedence when merged.
"""

from __future__ import annotations
import json
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List

from .errors import ConfigSourceError
from ..logging_setup import get_logger

log = get_logger("tweetwall.config.sources")


@dataclass(frozen=True)
class ConfigDocument:
    """A parsed configuration document and where it came from."""
    source: str
    data: Dict[str, Any]


def parse_document(text: str, source: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigSourceError(source, str(e)) from e
    if not isinstance(data, dict):
        raise ConfigSourceError(source, f"root is {type(data).__name__}, expected object")
    return data


def filesystem_candidates(filename: str, home: Path, workdir: Path) -> List[Path]:
    return [
        Path(home) / filename,
        Path(workdir) / "etc" / filename,
        Path(workdir) / filename,
    ]


def resource_documents(filename: str, packages: Iterable[str]) -> Iterator[ConfigDocument]:
    """Documents bundled as package data in any of ``packages``."""
    for package in packages:
        log.info("Searching for configuration files in package '%s/%s'", package, filename)
        try:
            candidate = resources.files(package).joinpath(filename)
        except ModuleNotFoundError as e:
            raise ConfigSourceError(f"Package '{package}'", str(e)) from e
        if not candidate.is_file():
            continue
        source = f"Package resource '{package}/{filename}'"
        log.info("Found config file: %s", source)
        try:
            text = candidate.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigSourceError(source, str(e)) from e
        yield ConfigDocument(source, parse_document(text, source))


def filesystem_documents(filename: str, home: Path, workdir: Path) -> Iterator[ConfigDocument]:
    """Override documents from the home, etc and working directories."""
    for path in filesystem_candidates(filename, home, workdir):
        log.debug("Searching for configuration files at path: %s", path.absolute())
        if not path.is_file():
            continue
        log.info("Found config override file: %s", path.absolute())
        source = f"File '{path}'"
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigSourceError(source, str(e)) from e
        yield ConfigDocument(source, parse_document(text, source))


def discover_documents(
    filename: str, packages: Iterable[str], home: Path, workdir: Path
) -> List[ConfigDocument]:
    return list(resource_documents(filename, packages)) + list(
        filesystem_documents(filename, home, workdir)
    )

"""Installed package metadata and manifest requirements.

Installed packages are listed by running a package-manager command that prints JSON
(``composer show --format=json`` by default) with an ``installed`` list of
``{"name": ..., "version": ...}`` entries. The list is loaded once per run and kept in a
``PackageCache`` owned by the caller; scope a cache to one scan to refresh it.

Manifests are JSON documents whose ``require`` section maps package names to version
constraints.
"""

import json
import logging
import shlex
import subprocess
from pathlib import Path
from typing import Any, Optional, Union

from depscope.errors import ManifestMalformedError, ManifestNotFoundError, PackageListError

__all__ = ["PackageCache", "CommandPackageSource", "ManifestReader"]

logger = logging.getLogger(__name__)


class PackageCache:
    """Holds the installed package list for the lifetime of one analysis run."""

    def __init__(self):
        self.packages: Optional[list[dict[str, str]]] = None

    @property
    def loaded(self) -> bool:
        return self.packages is not None


class CommandPackageSource:
    """Lists installed packages by running a command in the project root."""

    def __init__(
        self,
        command: str = "composer show --format=json",
        project_root: Union[str, Path] = ".",
        cache: Optional[PackageCache] = None,
    ):
        self._command = command
        self._project_root = Path(project_root)
        self._cache = cache if cache is not None else PackageCache()

    def get_installed_packages(self) -> list[dict[str, str]]:
        """Return installed packages, running the command on first use only.

        Raises:
            PackageListError: If the command cannot be run, fails, or prints
                something other than a JSON object with an ``installed`` list.
        """
        if not self._cache.loaded:
            self._cache.packages = self._load()
        return self._cache.packages

    def get_version_by_package(self, name: str) -> str:
        for package in self.get_installed_packages():
            if package.get("name") == name:
                return package.get("version", "")
        return ""

    def _load(self) -> list[dict[str, str]]:
        logger.info("Listing installed packages with %r in %s", self._command, self._project_root)
        try:
            completed = subprocess.run(
                shlex.split(self._command),
                cwd=self._project_root,
                capture_output=True,
                text=True,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            raise PackageListError(f"Could not run {self._command!r}: {e}") from e

        try:
            data = json.loads(completed.stdout)
        except json.JSONDecodeError as e:
            raise PackageListError(f"Output of {self._command!r} is not JSON: {e}") from e

        # composer wraps the list in an "installed" key, pip prints it bare
        installed = data.get("installed") if isinstance(data, dict) else data
        if not isinstance(installed, list):
            raise PackageListError(f"Output of {self._command!r} has no 'installed' list")

        logger.info("Found %d installed packages", len(installed))
        return installed


class ManifestReader:
    """Reads package manifests."""

    def read_data(self, manifest_path: Union[str, Path]) -> dict[str, Any]:
        """Return the decoded manifest.

        Raises:
            ManifestNotFoundError: If the path is empty or does not exist.
            ManifestMalformedError: If the file is not JSON or decodes to nothing.
        """
        path = _existing_path(manifest_path)
        logger.info("Reading manifest %s", path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ManifestMalformedError(f"Could not decode manifest \"{path}\": {e}") from e

        if not data:
            raise ManifestMalformedError(f"Empty contents after decoding manifest \"{path}\"")
        if not isinstance(data, dict):
            raise ManifestMalformedError(f"Manifest \"{path}\" is not a JSON object")
        return data

    def read_requirements(self, manifest_path: Union[str, Path]) -> dict[str, str]:
        """Return the manifest's ``require`` mapping.

        Raises:
            ManifestNotFoundError: If the path is empty or does not exist.
            ManifestMalformedError: If the manifest cannot be decoded or lacks a
                ``require`` section.
        """
        data = self.read_data(manifest_path)
        if "require" not in data:
            raise ManifestMalformedError(
                f"Manifest \"{manifest_path}\" does not have a \"require\" section"
            )
        return data["require"]


def _existing_path(manifest_path: Union[str, Path]) -> Path:
    if not manifest_path or not Path(manifest_path).is_file():
        raise ManifestNotFoundError(f"Manifest \"{manifest_path}\" does not exist")
    return Path(manifest_path)

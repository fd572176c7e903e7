from __future__ import annotations

from importlib import metadata
from typing import Mapping, Protocol

from .errors import ErrorCode, ErrorKind, MagnetoError


def _not_installed(package_id: str) -> MagnetoError:
    return MagnetoError(
        ErrorKind.NOT_INSTALLED_LOCALLY,
        f"{package_id} not installed in your device",
        code=ErrorCode.UPDATE,
        package_id=package_id,
    )


class InstalledVersionLookup(Protocol):
    def installed_version(self, package_id: str) -> str:
        """Return the locally installed version or raise NOT_INSTALLED_LOCALLY."""
        ...


class MappingVersionLookup:
    """Installed versions supplied up front, keyed by package id."""

    def __init__(self, versions: Mapping[str, str]) -> None:
        self._versions = dict(versions)

    def installed_version(self, package_id: str) -> str:
        version = self._versions.get(package_id)
        if not version:
            raise _not_installed(package_id)
        return version


class DistributionVersionLookup:
    """Installed versions of Python distributions in the running environment."""

    def installed_version(self, package_id: str) -> str:
        try:
            version = metadata.version(package_id)
        except metadata.PackageNotFoundError as e:
            raise _not_installed(package_id) from e
        if not version:
            raise _not_installed(package_id)
        return version

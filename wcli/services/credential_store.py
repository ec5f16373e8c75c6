"""Credential store for loading and validating the PASS/EC2/PEM triple."""

import os
from pathlib import Path
from typing import List, Mapping, Optional, Union

from dotenv import dotenv_values

from wcli.constants import (
    ENV_FILE_NAME,
    KEY_HOST,
    KEY_PASSWORD,
    KEY_PEM,
    REQUIRED_KEYS,
    USER_CONFIG_DIR,
)
from wcli.exceptions import ConfigFailure, ConfigurationError, MissingFieldError
from wcli.models.credentials import Credentials, SSHTarget

CredentialSource = Union[str, Path, Mapping[str, Optional[str]]]


def default_search_paths() -> List[Path]:
    """Locations tried, in order, when no configuration file is given."""
    return [
        Path.cwd() / ENV_FILE_NAME,
        Path(USER_CONFIG_DIR).expanduser() / ENV_FILE_NAME,
    ]


def find_env_file() -> Optional[Path]:
    """Smart .env file detection"""
    for path in default_search_paths():
        if path.is_file():
            return path
    return None


class CredentialStore:
    """Loads the credential triple once and hands it to the connector."""

    def __init__(self, source: Optional[CredentialSource] = None):
        """
        Initialize credential store.

        Args:
            source: Path to a .env file, an already-parsed mapping,
                or None to search the default locations
        """
        self.source = source
        self.source_name = ""
        self._credentials: Optional[Credentials] = None

    @property
    def credentials(self) -> Credentials:
        """Loaded credentials (loads on first access)."""
        if self._credentials is None:
            self._credentials = self.load()
        return self._credentials

    def load(self) -> Credentials:
        """
        Load and validate credentials from the configured source.

        Returns:
            Credentials with the three values verbatim

        Raises:
            ConfigurationError: If the source, a field or the key file is unusable
        """
        values = self._read_source()

        fields = {}
        for key in REQUIRED_KEYS:
            value = values.get(key)
            if value is None or not value.strip():
                raise MissingFieldError(key, self.source_name)
            fields[key] = value

        try:
            SSHTarget.parse(fields[KEY_HOST])
        except ValueError as e:
            raise ConfigurationError(
                ConfigFailure.MALFORMED_FIELD,
                f"'{KEY_HOST}' is malformed: {e}",
                field=KEY_HOST,
                context="Expected the form user@host, e.g. ec2-user@ec2-1-2-3-4.compute.amazonaws.com",
            )

        credentials = Credentials(
            password=fields[KEY_PASSWORD],
            host=fields[KEY_HOST],
            key_path=fields[KEY_PEM],
        )
        self._check_key_file(credentials.key_path_expanded)
        return credentials

    def _read_source(self) -> Mapping[str, Optional[str]]:
        source = self.source

        if isinstance(source, Mapping):
            self.source_name = "the configuration"
            return source

        if source is None:
            path = find_env_file()
            if path is None:
                searched = ", ".join(str(p) for p in default_search_paths())
                raise ConfigurationError(
                    ConfigFailure.SOURCE_NOT_FOUND,
                    ".env file not found",
                    context=f"Searched: {searched}",
                )
        else:
            path = Path(source).expanduser()
            if not path.is_file():
                raise ConfigurationError(
                    ConfigFailure.SOURCE_NOT_FOUND,
                    f"Configuration file not found: {path}",
                )

        self.source_name = str(path)
        return dotenv_values(path)

    @staticmethod
    def _check_key_file(key_path: Path) -> None:
        if not key_path.is_file():
            raise ConfigurationError(
                ConfigFailure.KEY_FILE_NOT_FOUND,
                f"Private key not found: {key_path}",
                field=KEY_PEM,
            )
        if not os.access(key_path, os.R_OK):
            raise ConfigurationError(
                ConfigFailure.KEY_FILE_PERMISSION_DENIED,
                f"Private key is not readable: {key_path}",
                field=KEY_PEM,
                context=f"Run: chmod 600 {key_path}",
            )


def load(source: Optional[CredentialSource] = None) -> Credentials:
    """Load credentials from ``source`` (see CredentialStore)."""
    return CredentialStore(source).load()

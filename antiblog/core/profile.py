#!/usr/bin/env python3
"""
profile.py
--------------------
Runtime configuration for a single Antiblog site.

A profile is a small mapping stored at ``~/.antiblog/<name>.json``. It
is parsed with PyYAML, so plain JSON and YAML documents both work:

    site_title: The Antiblog
    root_url: https://example.org
    database: sqlite:////var/lib/antiblog/site.db
    has_micro: true
    author:
      name: Anonymous
      href: https://example.org/about

Usage:
    from antiblog.core.profile import Profile

    profile = Profile.load("blog")
    db = AntiblogDB(profile)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from .exceptions import ConfigurationError
from .paths import PROFILE_DIR, PROFILE_ENV, profile_path


@dataclass(frozen=True)
class Profile:
    """
    Site configuration consumed by the database engine and view contexts.

    Attributes:
        site_title: Title rendered on every page
        author_name: Optional author name
        author_href: Optional author homepage
        root_url: Absolute site URL, prefixed to permalinks on redirects
        has_powered_by: Whether to render the "powered by" badge
        has_micro: Whether short-form posts get the synthetic ``micro`` tag
        theme: Template set used by the renderer
        donate_link: Optional donation URL
        api_key: Shared secret checked by the mutation gate
        http_port: Port the web front end listens on
        database: SQLAlchemy database URL
        mock: True for the built-in test profile
    """

    site_title: str = "The Antiblog"
    author_name: Optional[str] = None
    author_href: Optional[str] = None
    root_url: str = ""
    has_powered_by: bool = True
    has_micro: bool = True
    theme: str = "classic"
    donate_link: Optional[str] = None
    api_key: Optional[str] = None
    http_port: Optional[int] = None
    database: str = "sqlite://"
    mock: bool = field(default=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], mock: bool = False) -> "Profile":
        """
        Build a profile from a parsed configuration mapping.

        The nested ``author`` mapping is flattened into ``author_name`` and
        ``author_href``; unknown keys are ignored.

        Args:
            data: Parsed profile document
            mock: Mark the profile as the test profile

        Returns:
            Profile instance

        Raises:
            ConfigurationError: If data is not a mapping
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Profile must be a mapping, got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)} - {"mock"}
        values = {k: v for k, v in data.items() if k in known}

        author = data.get("author") or {}
        if not isinstance(author, dict):
            raise ConfigurationError("Profile 'author' must be a mapping")
        values.setdefault("author_name", author.get("name"))
        values.setdefault("author_href", author.get("href"))

        return cls(mock=mock, **values)

    @classmethod
    def load(
        cls,
        name: Optional[str] = None,
        profile_dir: Union[str, Path] = PROFILE_DIR,
    ) -> "Profile":
        """
        Load a named profile from disk.

        Args:
            name: Profile name; defaults to the ANTIBLOG_PROFILE variable
            profile_dir: Directory holding profile files

        Returns:
            Profile instance

        Raises:
            ConfigurationError: If the profile is unnamed, missing or malformed
        """
        name = name or os.environ.get(PROFILE_ENV)
        if not name:
            raise ConfigurationError(
                f"No profile given and {PROFILE_ENV} is not set"
            )

        location = profile_path(name, Path(profile_dir))
        try:
            with location.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigurationError(f"Profile not found: {location}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed profile {location}: {e}")

        return cls.from_dict(data)

    @classmethod
    def mock_profile(cls, **overrides: Any) -> "Profile":
        """
        Return the fixed profile used by tests.

        Args:
            **overrides: Field values replacing the mock defaults

        Returns:
            Profile flagged as mock
        """
        base = cls(
            site_title="Antiblog MOCK",
            author_name="Anonymous",
            author_href="http://geekyfox.net",
            root_url="http://example.com",
            has_powered_by=True,
            has_micro=True,
            api_key="foobarbaz",
            http_port=4000,
            database="sqlite://",
            mock=True,
        )
        return replace(base, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Site variables handed to the renderer with every context."""
        return {
            "site_title": self.site_title,
            "author_name": self.author_name,
            "author_href": self.author_href,
            "has_powered_by": self.has_powered_by,
            "root_url": self.root_url,
            "donate_link": self.donate_link,
        }

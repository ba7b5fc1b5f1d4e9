#!/usr/bin/env python3
"""Security validation utilities for bonjour-github."""

import os
import re


class SecurityValidator:
    """Security validation utilities for input sanitization and validation."""

    MAX_REPO_NAME_LENGTH = 100
    MAX_URL_LENGTH = 2048
    MAX_TOPIC_LENGTH = 50
    MAX_DESCRIPTION_LENGTH = 350
    MAX_PATH_LENGTH = 500

    SAFE_SLUG_PATTERN = re.compile(r"^(?!-)[A-Za-z0-9._-]+(/[A-Za-z0-9._-]+)?$")
    SAFE_GRANTEE_PATTERN = re.compile(r"^(?!-)[A-Za-z0-9._-]+(/[A-Za-z0-9._-]+)?$")
    SAFE_TOPIC_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")
    SAFE_HOST_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9.-]*$")
    SCP_URL_PATTERN = re.compile(r"^[A-Za-z0-9._-]+@[A-Za-z0-9.-]+:[^\s]+$")
    URL_CREDENTIALS_PATTERN = re.compile(r"(https?://)[^:/@\s]+:[^@\s]+@", re.IGNORECASE)
    URL_SCHEMES = ("https://", "http://", "ssh://", "git://")

    @staticmethod
    def _has_control_chars(value: str) -> bool:
        return "\x00" in value or any(ord(c) < 32 for c in value)

    @classmethod
    def validate_slug(cls, slug: str, what: str = "Repository name") -> str:
        """Validate a repository name or ``owner/name`` slug."""
        if not slug or not isinstance(slug, str):
            raise ValueError(f"{what} must be a non-empty string")

        if len(slug) > 2 * cls.MAX_REPO_NAME_LENGTH + 1:
            raise ValueError(
                f"{what} exceeds maximum length of {cls.MAX_REPO_NAME_LENGTH}"
            )

        if cls._has_control_chars(slug):
            raise ValueError(f"{what} contains null bytes or control characters")

        # Check for path traversal attempts
        if ".." in slug or "\\" in slug:
            raise ValueError(f"{what} contains invalid path characters")

        if not cls.SAFE_SLUG_PATTERN.match(slug):
            raise ValueError(
                f"{what} '{slug}' must look like 'name' or 'owner/name'"
            )

        if any(len(part) > cls.MAX_REPO_NAME_LENGTH for part in slug.split("/")):
            raise ValueError(
                f"{what} exceeds maximum length of {cls.MAX_REPO_NAME_LENGTH}"
            )

        return slug

    @classmethod
    def validate_source_url(cls, url: str) -> str:
        """Validate the URL of the repository to mirror."""
        if not url or not isinstance(url, str):
            raise ValueError("Source URL must be a non-empty string")

        if len(url) > cls.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        if cls._has_control_chars(url) or " " in url:
            raise ValueError("URL contains whitespace or control characters")

        # git treats a leading dash as an option
        if url.startswith("-"):
            raise ValueError("URL must not start with '-'")

        if not (url.lower().startswith(cls.URL_SCHEMES) or cls.SCP_URL_PATTERN.match(url)):
            raise ValueError(
                "URL must use https, http, ssh or git scheme, "
                "or the scp-like form user@host:path"
            )

        return url

    @classmethod
    def validate_topic(cls, topic: str) -> str:
        """Validate a GitHub topic label."""
        if len(topic) > cls.MAX_TOPIC_LENGTH:
            raise ValueError(
                f"Topic '{topic}' exceeds maximum length of {cls.MAX_TOPIC_LENGTH}"
            )
        if not cls.SAFE_TOPIC_PATTERN.match(topic):
            raise ValueError(
                f"Topic '{topic}' must use lowercase letters, numbers and hyphens "
                "and start with a letter or number"
            )
        return topic

    @classmethod
    def validate_grantee(cls, grantee: str) -> str:
        """Validate a team (``org/team``) or user name."""
        if not grantee:
            raise ValueError("Team or user name must be a non-empty string")
        if cls._has_control_chars(grantee):
            raise ValueError("Team or user name contains null bytes or control characters")
        if ".." in grantee or not cls.SAFE_GRANTEE_PATTERN.match(grantee):
            raise ValueError(
                f"Team or user '{grantee}' must look like 'org/team' or 'user'"
            )
        return grantee

    @classmethod
    def validate_description(cls, description: str) -> str:
        if len(description) > cls.MAX_DESCRIPTION_LENGTH:
            raise ValueError(
                f"Description exceeds maximum length of {cls.MAX_DESCRIPTION_LENGTH}"
            )
        if "\x00" in description or any(ord(c) < 32 for c in description if c != "\t"):
            raise ValueError("Description contains null bytes or control characters")
        return description

    @classmethod
    def validate_host(cls, host: str) -> str:
        if not host or not cls.SAFE_HOST_PATTERN.match(host):
            raise ValueError(f"GitHub host '{host}' must be a bare host name")
        return host.lower()

    @classmethod
    def validate_file_path(cls, path: str) -> str:
        """Validate file path for security."""
        if not path or not isinstance(path, str):
            raise ValueError("File path must be a non-empty string")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise ValueError(
                f"File path exceeds maximum length of {cls.MAX_PATH_LENGTH}"
            )

        if "\x00" in path:
            raise ValueError("File path contains null bytes")

        if ".." in path.split(os.sep):
            raise ValueError("File path contains path traversal sequences")

        return os.path.normpath(path)

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        # Patterns to redact
        patterns = [
            (r"https?://[^:/@\s]+:[^@\s]+@", "https://[REDACTED]@"),  # URLs with credentials
            (r"token[=:\s]+[^\s]+", "token=[REDACTED]"),  # Token assignments
            (r"password[=:\s]+[^\s]+", "password=[REDACTED]"),  # Password assignments
            (r"glpat-[A-Za-z0-9_-]+", "[GITLAB_TOKEN_REDACTED]"),  # GitLab tokens
            (r"gh[pousr]_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub tokens
            (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Fine-grained tokens
        ]

        sanitized = message
        for pattern, replacement in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized

    @classmethod
    def redact_url_credentials(cls, message: str) -> str:
        """Hide only the user:password part of URLs, leaving the rest verbatim."""
        if not message:
            return message
        return cls.URL_CREDENTIALS_PATTERN.sub(r"\1[REDACTED]@", message)

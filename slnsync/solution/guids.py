"""Deterministic GUIDs for generated solution entries."""

from __future__ import annotations

import hashlib

# Project type GUIDs written for discovered projects
SDK_PROJECT_GUID = "9A19103F-16F7-4668-BE54-9A1E7A4F7556"
LEGACY_CSHARP_GUID = "FAE04EC0-301F-11D3-BF4B-00C04F79EFBC"

# Well-known id of the "External" solution folder
EXTERNAL_FOLDER_GUID = "EC53F180-D7F9-46DF-B6A5-54511207D496"
EXTERNAL_FOLDER_NAME = "External"

PROJECT_GUID_SALT = "salt"


def format_guid(hex_digest: str) -> str:
    """Render a 32-character hex digest as an 8-4-4-4-12 upper-case GUID."""
    h = hex_digest
    return f"{h[0:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:32]}".upper()


def project_guid(name: str) -> str:
    """Stable project GUID derived from the project name.

    Re-running a sync must not churn the NestedProjects mapping, so the id
    is an MD5 of the salted name rather than a random uuid.
    """
    digest = hashlib.md5((name + PROJECT_GUID_SALT).encode("utf-8")).hexdigest()
    return format_guid(digest)


def solution_guid(is_sdk: bool) -> str:
    """Project type GUID for SDK-style or legacy C# projects."""
    return SDK_PROJECT_GUID if is_sdk else LEGACY_CSHARP_GUID

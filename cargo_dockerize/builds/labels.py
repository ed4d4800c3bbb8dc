"""OCI provenance labels for the image build.

Labels are kept as an ordered list rather than a mapping: the container
engine accepts repeated `--label` flags and we pass them in the order built.
"""

from __future__ import annotations

from datetime import datetime, timezone

from cargo_dockerize.types import BuildLabel, ImageReference

OCI_PREFIX = "org.opencontainers.image"

CREATED = f"{OCI_PREFIX}.created"
VERSION = f"{OCI_PREFIX}.version"
REVISION = f"{OCI_PREFIX}.revision"
TITLE = f"{OCI_PREFIX}.title"
DESCRIPTION = f"{OCI_PREFIX}.description"
AUTHORS = f"{OCI_PREFIX}.authors"
URL = f"{OCI_PREFIX}.url"
SOURCE = f"{OCI_PREFIX}.source"
VENDOR = f"{OCI_PREFIX}.vendor"
LICENSES = f"{OCI_PREFIX}.licenses"
APPLICATION_NAME = "application.name"


def format_created(moment: datetime) -> str:
    """Format a timestamp as ISO-8601 UTC with second precision.

    Naive datetimes are taken to be UTC already.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def build_labels(
    *,
    image: ImageReference,
    revision: str,
    created: datetime,
    title: str | None = None,
    description: str | None = None,
    authors: str | None = None,
    url: str | None = None,
    source: str | None = None,
    vendor: str | None = None,
    licenses: str | None = None,
    application_name: str | None = None,
) -> list[BuildLabel]:
    """Build the provenance labels for an image.

    Args:
        image: Primary image reference; its tag is the version label.
        revision: Resolved commit id or the sentinel.
        created: Build time.
        title: Title override (defaults to the image name).
        description, authors, url, source, vendor, licenses,
        application_name: Optional label values; omitted when None.

    Returns:
        Labels in a stable order: created, version, revision, title, then
        the optional labels that were supplied.
    """
    labels = [
        BuildLabel(CREATED, format_created(created)),
        BuildLabel(VERSION, image.tag),
        BuildLabel(REVISION, revision),
        BuildLabel(TITLE, title if title is not None else image.name),
    ]

    optional = [
        (DESCRIPTION, description),
        (AUTHORS, authors),
        (URL, url),
        (SOURCE, source),
        (VENDOR, vendor),
        (LICENSES, licenses),
        (APPLICATION_NAME, application_name),
    ]
    labels.extend(BuildLabel(key, value) for key, value in optional if value is not None)
    return labels


__all__ = [
    "APPLICATION_NAME",
    "AUTHORS",
    "CREATED",
    "DESCRIPTION",
    "LICENSES",
    "REVISION",
    "SOURCE",
    "TITLE",
    "URL",
    "VENDOR",
    "VERSION",
    "build_labels",
    "format_created",
]

"""Paper identifier normalization from review filenames."""

import re

from review_citations.core.entities import PaperId

DOCUMENT_EXTENSIONS = (".md", ".markdown")

_VERSION_SUFFIX = re.compile(r"v\d+$")


def strip_version(identifier: str) -> str:
    """Remove a trailing ``v<digits>`` version marker (``2401.12345v2`` -> ``2401.12345``)."""
    return _VERSION_SUFFIX.sub("", identifier)


def normalize(filename: str) -> PaperId:
    """Derive the paper identifier encoded in a review filename.

    Filenames look like ``2401_12345v2_techreview.md``: the first two
    underscore-separated segments form the id. With a single segment the
    segment itself is used. Never raises.
    """
    stem = filename
    for extension in DOCUMENT_EXTENSIONS:
        if stem.lower().endswith(extension):
            stem = stem[: -len(extension)]
            break

    segments = stem.split("_")
    if len(segments) >= 2:
        display = f"{segments[0]}_{segments[1]}"
        canonical = f"{segments[0]}.{segments[1]}"
    else:
        display = canonical = segments[0]

    return PaperId(
        canonical=canonical,
        display=display,
        versionless=strip_version(canonical),
    )

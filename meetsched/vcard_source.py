"""Read contacts and their email records from vCard (.vcf) files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import vobject

from .models import ContactEntry, EmailRecord

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# File discovery
# ---------------------------------------------------------------------------

def find_vcf_files(path: str | Path, *, recursive: bool = False) -> list[Path]:
    """Resolve *path* to a list of .vcf files.

    - If *path* is a file, return it (must end in .vcf).
    - If *path* is a directory, glob for *.vcf (optionally recursive).

    Raises FileNotFoundError if path doesn't exist,
    ValueError if a file doesn't have .vcf extension or no .vcf files found.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Path not found: {p}")

    if p.is_file():
        if p.suffix.lower() != ".vcf":
            raise ValueError(f"Not a .vcf file: {p}")
        return [p]

    pattern = "**/*.vcf" if recursive else "*.vcf"
    files = sorted(p.glob(pattern))
    if not files:
        raise ValueError(f"No .vcf files found in {p}")
    return files


def parse_vcard_file(path: Path) -> list:
    """Parse a .vcf file into vobject vCard components.

    Returns an empty list if the file can't be parsed.
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
        return list(vobject.readComponents(text))
    except Exception as exc:
        log.warning("Failed to parse %s: %s", path, exc)
        return []


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def _is_preferred(child) -> bool:
    """True for EMAIL lines flagged TYPE=PREF (v3), PREF=n (v4) or bare PREF (v2.1)."""
    types = {t.upper() for t in child.params.get("TYPE", [])}
    if "PREF" in types or "PREF" in {k.upper() for k in child.params}:
        return True
    singletons = getattr(child, "singletonparams", []) or []
    return any(s.upper() == "PREF" for s in singletons)


def _extract_name(vcard) -> str:
    """FN first, then the structured N field."""
    name = ""
    if hasattr(vcard, "fn"):
        name = (vcard.fn.value or "").strip()
    if not name and hasattr(vcard, "n"):
        n = vcard.n.value
        parts = [p for p in [n.prefix, n.given, n.additional, n.family, n.suffix] if p]
        name = " ".join(parts).strip()
    return name


def _extract_photo_ref(vcard) -> str | None:
    """PHOTO given as a URI; inline binary photos are not referenced."""
    if not hasattr(vcard, "photo"):
        return None
    value = vcard.photo.value
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def extract_contact(vcard, fallback_id: str) -> ContactEntry | None:
    """Convert one vCard component into a :class:`ContactEntry`.

    Email values are kept as written.  Returns None for a card with
    neither a name nor any email line.
    """
    emails = []
    for child in vcard.getChildren():
        if child.name.upper() == "EMAIL":
            value = (child.value or "").strip()
            if value:
                emails.append(EmailRecord(address=value, is_primary=_is_preferred(child)))

    name = _extract_name(vcard)
    if not name and not emails:
        return None
    if not name:
        name = emails[0].address

    contact_id = fallback_id
    if hasattr(vcard, "uid") and vcard.uid.value:
        contact_id = vcard.uid.value.strip()

    return ContactEntry(
        contact_id=contact_id,
        display_name=name,
        emails=tuple(emails),
        photo_ref=_extract_photo_ref(vcard),
    )


def iter_contacts(path: str | Path, *, recursive: bool = False) -> Iterator[ContactEntry]:
    """Yield every usable contact from the vCard file(s) at *path*."""
    for vcf in find_vcf_files(path, recursive=recursive):
        for i, card in enumerate(parse_vcard_file(vcf)):
            contact = extract_contact(card, f"{vcf.name}#{i}")
            if contact is None:
                log.debug("Skipping empty vCard %d in %s", i, vcf)
                continue
            yield contact


def load_contacts(path: str | Path, *, recursive: bool = False) -> list[ContactEntry]:
    contacts = list(iter_contacts(path, recursive=recursive))
    log.info("Loaded %d contacts from %s", len(contacts), path)
    return contacts

"""
Filename Reconciler - Spreadsheet vs Blob Storage Comparison

Normalizes PDF filenames into canonical comparison keys and partitions two
filename collections into matched / only-in-A / only-in-B sets.

Collision policy: when several originals normalize to the same key, the one
seen last wins the key -> original mapping. Use find_collisions() to report
those cases; reconcile() never merges or rejects them.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

# Smart quotes, apostrophe, backtick and question mark (unsafe in blob pathnames)
_UNSAFE_CHARS_RE = re.compile(r"[\u2018\u2019\u201C\u201D'`?]")
_DOUBLE_PDF_SUFFIX = '.pdf.pdf'
_PDF_SUFFIX = '.pdf'


@dataclass
class ReconciliationResult:
    """Outcome of reconciling source A (spreadsheet) against source B (store)"""
    matched: List[str] = field(default_factory=list)  # originals from source A
    only_in_a: List[str] = field(default_factory=list)
    only_in_b: List[str] = field(default_factory=list)
    total_a: int = 0
    unique_a: int = 0
    total_b: int = 0
    unique_b: int = 0

    @property
    def matched_count(self) -> int:
        return len(self.matched)

    @property
    def is_perfect_match(self) -> bool:
        return not self.only_in_a and not self.only_in_b

    def to_dict(self) -> Dict:
        return {
            'matched': list(self.matched),
            'only_in_a': list(self.only_in_a),
            'only_in_b': list(self.only_in_b),
            'total_a': self.total_a,
            'unique_a': self.unique_a,
            'total_b': self.total_b,
            'unique_b': self.unique_b,
            'matched_count': self.matched_count,
        }


def normalize(raw: str) -> str:
    """
    Normalize a filename for comparison

    - trim, lowercase
    - replace smart quotes / apostrophes / backticks / question marks with '_'
    - collapse '.pdf.pdf' into '.pdf'
    - ensure a '.pdf' extension

    Examples:
        "Report.PDF" -> "report.pdf"
        "Smith’s Study?.pdf" -> "smith_s study_.pdf"
        "" -> ".pdf"
    """
    name = raw.strip().lower()
    name = _UNSAFE_CHARS_RE.sub('_', name)
    # x.pdf.pdf.pdf -> x.pdf
    while name.endswith(_DOUBLE_PDF_SUFFIX):
        name = name[:-len(_PDF_SUFFIX)]
    if not name.endswith(_PDF_SUFFIX):
        name += _PDF_SUFFIX
    return name


def _is_blank(name: str) -> bool:
    return not name or not name.strip()


def _build_key_map(names: Iterable[str]) -> tuple:
    """Return (key -> last original, count of non-blank entries)"""
    key_map: Dict[str, str] = {}
    total = 0
    for name in names:
        if _is_blank(name):
            continue
        total += 1
        key_map[normalize(name)] = name
    return key_map, total


def reconcile(source_a: Iterable[str], source_b: Iterable[str]) -> ReconciliationResult:
    """
    Compare two filename collections after normalization

    Args:
        source_a: Filenames from the spreadsheet column
        source_b: Basenames from the blob storage listing

    Returns:
        ReconciliationResult; every normalized key appears in exactly one of
        matched / only_in_a / only_in_b
    """
    norm_a, total_a = _build_key_map(source_a)
    norm_b, total_b = _build_key_map(source_b)

    result = ReconciliationResult(
        total_a=total_a,
        unique_a=len(norm_a),
        total_b=total_b,
        unique_b=len(norm_b),
    )

    for key, original in norm_a.items():
        if key in norm_b:
            result.matched.append(original)
        else:
            result.only_in_a.append(original)

    for key, original in norm_b.items():
        if key not in norm_a:
            result.only_in_b.append(original)

    return result


def find_collisions(names: Iterable[str]) -> Dict[str, List[str]]:
    """
    Find normalized keys reached by more than one distinct original

    Returns:
        Dict of key -> distinct originals in first-seen order
    """
    seen: Dict[str, List[str]] = {}
    for name in names:
        if _is_blank(name):
            continue
        originals = seen.setdefault(normalize(name), [])
        if name not in originals:
            originals.append(name)
    return {key: originals for key, originals in seen.items() if len(originals) > 1}

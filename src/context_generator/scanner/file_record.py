"""Record of a single entry visited during a dry run."""

from dataclasses import dataclass
from typing import Optional

from context_generator.exclusion_rules.filter import ExclusionReason


@dataclass(frozen=True)
class FileRecord:
    """An entry visited during a dry run, either included or excluded.

    Attributes:
        path: Absolute path of the entry.
        relative_path: Path relative to the scan root, ``/``-separated.
        is_dir: True for directories.
        is_text: True if the entry is an included file whose content sniffs as text.
            Always False for directories and excluded entries, which are never sniffed.
        excluded: True if the filter excluded the entry.
        reason: Why the entry was excluded, for excluded entries.
    """

    path: str
    relative_path: str
    is_dir: bool = False
    is_text: bool = False
    excluded: bool = False
    reason: Optional[ExclusionReason] = None

import os
from pathlib import Path
from typing import Iterator, Optional, Union


class FileDiscoverer:
    """
    Recursively lists the record files of an expanded catalog.

    The inner tape archive is expanded next to its own tree, so the file
    named like it, and any file carrying its suffix, is skipped.
    """

    def __init__(self, excluded_suffix: str = ".tar", excluded_name: Optional[str] = None):
        self.excluded_suffix = excluded_suffix
        self.excluded_name = excluded_name

    def is_excluded(self, filename: str) -> bool:
        if self.excluded_name is not None and filename == self.excluded_name:
            return True
        # an empty suffix would match every file
        return bool(self.excluded_suffix) and filename.endswith(self.excluded_suffix)

    def discover(self, expansion_dir: Union[str, Path]) -> Iterator[Path]:
        """
        Yield every record file under expansion_dir.

        One-shot generator, no ordering guarantee.
        """
        for dirpath, _dirnames, filenames in os.walk(expansion_dir):
            for filename in filenames:
                if self.is_excluded(filename):
                    continue
                yield Path(dirpath) / filename

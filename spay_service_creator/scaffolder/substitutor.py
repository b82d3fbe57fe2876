"""In-place placeholder substitution for files cloned from the template.

Template files carry literal tokens such as ``{{PACKAGE_NAME}}``.  The
substitutor replaces every token in a single pass over the original text:
replacement values are never rescanned, so a value that happens to contain
another token is written out verbatim.  Files are read and written as raw
UTF-8 bytes so line endings survive untouched.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from ..service_config import DB_NAME_TOKEN


@dataclass(frozen=True)
class TemplatedFile:
    """A file in the cloned template that contains placeholder tokens.

    ``tokens`` restricts which entries of the shared placeholder map apply
    to this file; ``None`` means all of them.
    """

    path: str
    tokens: tuple[str, ...] | None = None


TEMPLATED_FILES: tuple[TemplatedFile, ...] = (
    TemplatedFile("build.gradle.kts"),
    TemplatedFile(".github/workflows/main-pipeline.yml"),
    TemplatedFile("docker-compose.yml", tokens=(DB_NAME_TOKEN,)),
)


def substitute_text(content: str, placeholders: Mapping[str, str]) -> tuple[str, int]:
    """Replace every placeholder in *content*.

    Returns:
        ``(new_content, replacement_count)``.
    """
    keys = [key for key in placeholders if key]
    if not keys:
        return content, 0
    # Longest first so a token that prefixes another never wins the match.
    pattern = re.compile(
        "|".join(re.escape(key) for key in sorted(keys, key=len, reverse=True))
    )
    return pattern.subn(lambda match: placeholders[match.group(0)], content)


def substitute_file(path: str | Path, placeholders: Mapping[str, str]) -> int:
    """Substitute placeholders in the file at *path*, in place.

    A missing file is not an error: nothing is written and ``0`` is
    returned.  The file is only rewritten when at least one token was
    replaced.

    Returns:
        The number of replacements made.
    """
    file_path = Path(path)
    if not file_path.is_file():
        return 0

    original = file_path.read_bytes().decode("utf-8")
    updated, count = substitute_text(original, placeholders)
    if count:
        file_path.write_bytes(updated.encode("utf-8"))
    return count


class TemplateSubstitutor:
    """Applies one shared placeholder map to the templated files of a project."""

    def __init__(self, placeholders: Mapping[str, str]) -> None:
        self.placeholders = dict(placeholders)

    def placeholders_for(self, templated: TemplatedFile) -> dict[str, str]:
        """Project the shared map onto the tokens *templated* accepts."""
        if templated.tokens is None:
            return dict(self.placeholders)
        return {
            token: self.placeholders[token]
            for token in templated.tokens
            if token in self.placeholders
        }

    def apply(
        self,
        project_root: str | Path,
        files: Iterable[TemplatedFile] = TEMPLATED_FILES,
    ) -> dict[str, int]:
        """Substitute every file in *files* under *project_root*.

        Returns:
            Mapping of relative path -> replacement count (``0`` for files
            that are missing or contain no tokens).
        """
        root = Path(project_root)
        return {
            templated.path: substitute_file(
                root / templated.path, self.placeholders_for(templated)
            )
            for templated in files
        }

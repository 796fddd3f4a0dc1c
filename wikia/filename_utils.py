#!/usr/bin/env python3
"""
Filename utilities for saving article data to disk.

Article titles may contain characters that are not valid in file names;
they are escaped into tokens and restored on the way back.
"""

ESCAPES = (
    ("/", "_SLASH_"),
    ("\\", "_BACKSLASH_"),
    (":", "_COLON_"),
    ("*", "_STAR_"),
    ("?", "_QUESTION_"),
    ('"', "_QUOTE_"),
    ("<", "_LT_"),
    (">", "_GT_"),
    ("|", "_PIPE_"),
)


def title_to_filename(title: str, extension: str = ".json") -> str:
    """
    Convert an article title to a safe filename.

    Args:
        title: Article title (e.g., "Category:Jedi")
        extension: Extension to append

    Returns:
        Safe filename (e.g., "Category_COLON_Jedi.json")
    """
    safe = title
    for char, token in ESCAPES:
        safe = safe.replace(char, token)
    return safe + extension


def filename_to_title(filename: str, extension: str = ".json") -> str:
    """Convert a filename produced by title_to_filename back to the title."""
    title = filename[: -len(extension)] if extension and filename.endswith(extension) else filename
    for char, token in ESCAPES:
        title = title.replace(token, char)
    return title
